import html
from typing import Optional, Sequence

from app.schemas.blog import PostSummary, ResolvedPost
from app.utils import format_date

STYLE = """
body{margin:0;background:#1a1d23;color:#d7d7d7;font-family:Inter,sans-serif}
header,main{max-width:720px;margin:0 auto;padding:32px 16px}
a{color:#ff57b2;text-decoration:none}
h1,h2,h3{color:#f8f8f8}
.banner{width:100%;max-height:400px;object-fit:cover}
.info{display:flex;gap:24px;font-size:14px;color:#bbb}
.post-link h2{margin-bottom:4px}
.edited{font-style:italic;font-size:14px}
.nav{display:flex;justify-content:space-between;border-top:1px solid #333;padding-top:24px}
.preview-exit{display:block;margin-top:32px;padding:12px;background:#ff57b2;color:#fff;text-align:center}
"""


def _e(value) -> str:
    return html.escape(str(value or ""), quote=True)


def render_layout(title: str, body: str, site_title: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="pt-BR">\n<head>\n<meta charset="utf-8" />\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1" />\n'
        f"<title>{_e(title)}</title>\n<style>{STYLE}</style>\n</head>\n<body>\n"
        f'<header><a href="/"><img src="/logo.svg" alt="logo" /> {_e(site_title)}</a></header>\n'
        f"{body}\n</body>\n</html>\n"
    )


def render_listing(
    posts: Sequence[PostSummary],
    *,
    site_title: str,
    load_more_href: Optional[str] = None,
    preview: bool = False,
) -> str:
    """Listing page. The load-more link is only shown while more pages remain."""
    items = "\n".join(
        f'<a class="post-link" href="/post/{_e(p.uid)}">'
        f"<h2>{_e(p.title)}</h2><p>{_e(p.subtitle)}</p>"
        f'<div class="info"><time>{_e(format_date(p.first_publication_date))}</time>'
        f"<span>{_e(p.author)}</span></div></a>"
        for p in posts
    )
    load_more = (
        f'<a class="load-more" href="{_e(load_more_href)}">Carregar mais posts</a>'
        if load_more_href
        else ""
    )
    body = f"<main>\n{items}\n{load_more}{_preview_exit(preview)}\n</main>"
    return render_layout(site_title, body, site_title)


def render_post(resolved: ResolvedPost, *, site_title: str) -> str:
    post = resolved.post
    banner = (
        f'<img class="banner" src="{_e(post.banner_url)}" alt="banner" />'
        if post.banner_url
        else ""
    )
    edited = (
        f'<p class="edited">* editado em {_e(resolved.formatted_last_edit)}</p>'
        if resolved.formatted_last_edit
        else ""
    )
    body = (
        f"{banner}\n<main>\n<h1>{_e(post.title)}</h1>\n"
        f'<div class="info"><time>{_e(resolved.formatted_date)}</time>'
        f"<span>{_e(post.author)}</span>"
        f"<span>{resolved.reading_time} min</span></div>\n{edited}\n"
        # html is already sanitised
        f'<article class="content">{resolved.html}</article>\n'
        f"{_adjacent_nav(resolved)}{_preview_exit(resolved.preview)}\n</main>"
    )
    return render_layout(f"{post.title} | {site_title}", body, site_title)


def render_placeholder(site_title: str) -> str:
    return render_layout(site_title, "<main><div>Carregando...</div></main>", site_title)


def render_error(site_title: str) -> str:
    body = "<main><p>Não foi possível carregar o conteúdo. Tente novamente.</p></main>"
    return render_layout(site_title, body, site_title)


def _adjacent_nav(resolved: ResolvedPost) -> str:
    previous, following = resolved.adjacent.previous, resolved.adjacent.next
    if not previous and not following:
        return ""
    links = []
    if previous:
        links.append(
            f'<a class="previous" href="/post/{_e(previous.uid)}">'
            f"<span>{_e(previous.title)}</span> Post anterior</a>"
        )
    if following:
        links.append(
            f'<a class="next" href="/post/{_e(following.uid)}">'
            f"<span>{_e(following.title)}</span> Próximo post</a>"
        )
    return f'<nav class="nav">{"".join(links)}</nav>'


def _preview_exit(preview: bool) -> str:
    if not preview:
        return ""
    return '<a class="preview-exit" href="/api/exit-preview">Sair do modo Preview</a>'

from pydantic import TypeAdapter

from app.schemas.blog import (
    ContentGroup,
    EmbedBlock,
    HeadingBlock,
    ImageBlock,
    RichTextBlock,
    Span,
    TextBlock,
    UnknownBlock,
)
from app.services.rich_text import (
    as_html,
    as_text,
    content_html,
    content_text,
    render_spans,
    resolve_link,
)

blocks_adapter = TypeAdapter(list[RichTextBlock])


def parse(raw):
    return blocks_adapter.validate_python(raw)


def test_blocks_are_parsed_into_tagged_variants():
    blocks = parse(
        [
            {"type": "heading3", "text": "Title", "spans": []},
            {"type": "paragraph", "text": "Body", "spans": []},
            {"type": "image", "url": "https://img/x.png", "alt": "x"},
            {"type": "embed", "oembed": {"embed_url": "https://youtu.be/1"}},
            {"type": "table", "rows": []},
            {"text": "no type"},
        ]
    )
    assert [type(b) for b in blocks] == [
        HeadingBlock,
        TextBlock,
        ImageBlock,
        EmbedBlock,
        UnknownBlock,
        UnknownBlock,
    ]
    assert blocks[0].level == 3
    assert blocks[4].type == "table"


def test_as_html_renders_headings_and_paragraphs():
    blocks = parse(
        [
            {"type": "heading2", "text": "Hi", "spans": []},
            {"type": "paragraph", "text": "a < b", "spans": []},
            {"type": "preformatted", "text": "code", "spans": []},
        ]
    )
    assert as_html(blocks) == "<h2>Hi</h2><p>a &lt; b</p><pre>code</pre>"


def test_as_html_groups_consecutive_list_items():
    blocks = parse(
        [
            {"type": "list-item", "text": "one", "spans": []},
            {"type": "list-item", "text": "two", "spans": []},
            {"type": "o-list-item", "text": "first", "spans": []},
            {"type": "paragraph", "text": "after", "spans": []},
        ]
    )
    assert as_html(blocks) == (
        "<ul><li>one</li><li>two</li></ul><ol><li>first</li></ol><p>after</p>"
    )


def test_as_html_closes_trailing_list():
    blocks = parse([{"type": "list-item", "text": "only", "spans": []}])
    assert as_html(blocks) == "<ul><li>only</li></ul>"


def test_as_html_renders_image_and_skips_unknown():
    blocks = parse(
        [
            {"type": "image", "url": "https://img/x.png", "alt": "pic"},
            {"type": "mystery"},
            {"type": "image"},
        ]
    )
    assert as_html(blocks) == (
        '<p class="block-img"><img src="https://img/x.png" alt="pic" /></p>'
    )


def test_as_html_renders_embed_wrapper():
    blocks = parse(
        [
            {
                "type": "embed",
                "oembed": {
                    "embed_url": "https://www.youtube.com/watch?v=abc",
                    "type": "video",
                    "provider_name": "YouTube",
                    "html": "<iframe></iframe>",
                },
            }
        ]
    )
    html = as_html(blocks)
    assert html.startswith('<div data-oembed="https://www.youtube.com/watch?v=abc"')
    assert "<iframe></iframe>" in html


def test_render_spans_applies_formatting():
    spans = [
        Span(start=0, end=4, type="strong"),
        Span(start=5, end=9, type="em"),
    ]
    assert render_spans("bold ital rest", spans) == "<strong>bold</strong> <em>ital</em> rest"


def test_render_spans_nests_contained_spans():
    spans = [
        Span(start=0, end=11, type="hyperlink", data={"link_type": "Web", "url": "https://x.dev"}),
        Span(start=0, end=5, type="strong"),
    ]
    assert render_spans("hello world", spans) == (
        '<a href="https://x.dev"><strong>hello</strong> world</a>'
    )


def test_render_spans_clips_overlapping_spans():
    spans = [Span(start=0, end=5, type="strong"), Span(start=3, end=8, type="em")]
    assert render_spans("abcdefgh", spans) == "<strong>abc<em>de</em></strong>fgh"


def test_render_spans_ignores_out_of_range_and_unknown_spans():
    spans = [Span(start=2, end=99, type="strong"), Span(start=0, end=2, type="weird")]
    assert render_spans("abcd", spans) == "abcd"


def test_render_spans_escapes_text_and_keeps_line_breaks():
    assert render_spans("<b>\nnext", []) == "&lt;b&gt;<br />next"


def test_hyperlink_with_target_gets_rel():
    spans = [
        Span(
            start=0,
            end=4,
            type="hyperlink",
            data={"link_type": "Web", "url": "https://x.dev", "target": "_blank"},
        )
    ]
    assert render_spans("link", spans) == (
        '<a href="https://x.dev" target="_blank" rel="noopener noreferrer">link</a>'
    )


def test_label_span_becomes_classed_span():
    spans = [Span(start=0, end=4, type="label", data={"label": "note"})]
    assert render_spans("text", spans) == '<span class="note">text</span>'


def test_resolve_link_maps_documents_to_routes():
    assert resolve_link({"link_type": "Document", "type": "post", "uid": "hi"}) == "/post/hi"
    assert resolve_link({"link_type": "Document", "type": "page", "uid": "x"}) == "/"
    assert resolve_link({"link_type": "Web", "url": "https://a.b"}) == "https://a.b"
    assert resolve_link({}) == ""


def test_as_text_joins_text_blocks_only():
    blocks = parse(
        [
            {"type": "heading1", "text": "Head", "spans": []},
            {"type": "image", "url": "https://img"},
            {"type": "paragraph", "text": "body text", "spans": []},
        ]
    )
    assert as_text(blocks) == "Head body text"


def test_content_html_and_text_walk_groups_in_order():
    content = [
        ContentGroup(heading="Intro", body=[{"type": "paragraph", "text": "one two"}]),
        ContentGroup(heading="End", body=[]),
    ]
    assert content_html(content) == "<h2>Intro</h2><p>one two</p><h2>End</h2>"
    assert content_text(content) == "Intro one two End"


def test_content_group_tolerates_malformed_fields():
    group = ContentGroup.model_validate({"heading": None, "body": "not a list"})
    assert group.heading == ""
    assert group.body == []


def test_content_group_coerces_null_text_and_drops_spans_without_offsets():
    group = ContentGroup.model_validate(
        {
            "heading": "Intro",
            "body": [
                {"type": "paragraph", "text": None, "spans": []},
                {
                    "type": "paragraph",
                    "text": "bold here",
                    "spans": [
                        {"type": "strong"},
                        {"start": 0, "end": 4, "type": "strong", "data": None},
                    ],
                },
            ],
        }
    )

    empty, bold = group.body
    assert isinstance(empty, TextBlock)
    assert empty.text == ""
    assert bold.spans == [Span(start=0, end=4, type="strong")]
    assert content_html([group]) == "<h2>Intro</h2><p></p><p><strong>bold</strong> here</p>"


def test_content_group_turns_invalid_known_blocks_into_unknown():
    group = ContentGroup.model_validate(
        {
            "heading": "",
            "body": [
                {"type": "image", "url": 123, "dimensions": "wide"},
                {"type": "embed", "oembed": "not a dict"},
                {"type": "paragraph", "text": "fine"},
            ],
        }
    )

    assert [type(b) for b in group.body] == [UnknownBlock, UnknownBlock, TextBlock]
    assert as_html(group.body) == "<p>fine</p>"

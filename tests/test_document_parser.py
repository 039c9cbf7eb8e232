import pytest

from webdotmd.document import (
    Break,
    Code,
    Header,
    Link,
    ListBlock,
    ListKind,
    Text,
    is_list,
    parse_document,
    parse_list_kind,
)
from webdotmd.errors import StructuralParseError


def _items(*texts):
    return tuple((Text(t),) for t in texts)


def test_parse_content_text(parser):
    assert parser.parse_content("Some random text.") == [Text("Some random text.")]


def test_blocks_of_text_alternate_with_breaks(parser):
    got = parser.parse_content("Some random text.\n\nSome other random text.\n\nLast one.\n")
    assert got == [
        Text("Some random text."),
        Break(),
        Text("Some other random text."),
        Break(),
        Text("Last one."),
    ]


def test_headers(parser):
    got = parser.parse_content("# Header\n\n## Header\n\n#### Header")
    assert got == [
        Header(level=1, children=(Text("Header"),)),
        Break(),
        Header(level=2, children=(Text("Header"),)),
        Break(),
        Header(level=4, children=(Text("Header"),)),
    ]


def test_header_without_space_is_fatal(parser):
    with pytest.raises(StructuralParseError, match="#Header"):
        parser.parse_block("#Header")


def test_text_with_link(parser):
    got = parser.parse_block("Some text: [link text](coolpage.com). Cool.")
    assert got == [
        Text("Some text: "),
        Link(text="link text", target="coolpage.com"),
        Text(". Cool."),
    ]


def test_multiple_links_keep_spacing(parser):
    got = parser.parse_block("[a](1) and [b](2)")
    assert got == [Link("a", "1"), Text(" and "), Link("b", "2")]


def test_link_at_end_has_no_trailing_text(parser):
    assert parser.parse_block("see [here](x.html)") == [Text("see "), Link("here", "x.html")]


def test_many_links_in_one_block(parser):
    block = " ".join(f"[a{i}](b{i})" for i in range(600))
    got = parser.parse_block(block)
    links = [el for el in got if isinstance(el, Link)]
    assert len(links) == 600
    assert links[0] == Link("a0", "b0")
    assert links[-1] == Link("a599", "b599")
    assert got[:3] == [Link("a0", "b0"), Text(" "), Link("a1", "b1")]
    assert len(got) == 1199


def test_header_with_link(parser):
    got = parser.parse_block("# Some text with a link: [link text](coolpage.com). Cool.")
    assert got == [
        Header(
            level=1,
            children=(
                Text("Some text with a link: "),
                Link(text="link text", target="coolpage.com"),
                Text(". Cool."),
            ),
        )
    ]


def test_is_a_list():
    assert not is_list("Some text.")
    assert is_list("- Item 1\n- Item 2")
    assert is_list("+ Item 1\n+ Item 2")
    assert is_list("1. Item 1\n1. Item 2")
    assert is_list("a) Item 1\na) Item 2")
    assert not is_list("- Item 1\nplain line")
    assert not is_list("2. Item")


def test_parse_list_kind():
    assert parse_list_kind("- Item 1") == (ListKind.UNORDERED, "-")
    assert parse_list_kind("+ Item 1") == (ListKind.UNORDERED, "+")
    assert parse_list_kind("1. Item 1") == (ListKind.ORDERED, "1.")
    assert parse_list_kind("a) Item 1") == (ListKind.ORDERED, "a)")
    with pytest.raises(StructuralParseError):
        parse_list_kind("* Item")


def test_lists(parser):
    content = (
        "- item 1\n- item 2\n\n"
        "1. item 1\n1. item 2\n\n"
        "a) item with a link [text](link.com), hurray!\na) item 2\n\n"
        "- [text](link.com)"
    )
    got = parser.parse_content(content)
    assert got == [
        ListBlock(kind=ListKind.UNORDERED, marker="-", items=_items("item 1", "item 2")),
        Break(),
        ListBlock(kind=ListKind.ORDERED, marker="1.", items=_items("item 1", "item 2")),
        Break(),
        ListBlock(
            kind=ListKind.ORDERED,
            marker="a)",
            items=(
                (Text("item with a link "), Link("text", "link.com"), Text(", hurray!")),
                (Text("item 2"),),
            ),
        ),
        Break(),
        ListBlock(kind=ListKind.UNORDERED, marker="-", items=((Link("text", "link.com"),),)),
    ]


def test_nested_list(parser):
    got = parser.parse_block("- a\n    - b\n    - c\n- d")
    nested = ListBlock(kind=ListKind.UNORDERED, marker="-", items=_items("b", "c"))
    assert got == [
        ListBlock(
            kind=ListKind.UNORDERED,
            marker="-",
            items=((Text("a"),), (nested,), (Text("d"),)),
        )
    ]


def test_nested_list_two_levels_and_trailing(parser):
    got = parser.parse_block("1. a\n    + b\n        - c")
    inner = ListBlock(kind=ListKind.UNORDERED, marker="-", items=_items("c"))
    middle = ListBlock(kind=ListKind.UNORDERED, marker="+", items=((Text("b"),), (inner,)))
    assert got == [ListBlock(kind=ListKind.ORDERED, marker="1.", items=((Text("a"),), (middle,)))]


def test_code_block(parser):
    got = parser.parse_content("```python\ndef f():\n    return 1\n\n\nprint(f())\n```\n\nafter")
    assert got == [
        Code(language="python", body="def f():\n    return 1\n\n\nprint(f())"),
        Break(),
        Text("after"),
    ]


def test_code_block_without_language(parser):
    assert parser.parse_block("```\n- not a list\n```") == [Code(language="", body="- not a list")]


def test_code_block_keeps_first_line_indent(parser):
    got = parser.parse_block("```py\n    indented = 1\nx = 2\n```")
    assert got == [Code(language="py", body="    indented = 1\nx = 2")]


def test_code_wins_over_link(parser):
    assert parser.parse_block("```md\n[a](b)\n```") == [Code(language="md", body="[a](b)")]


def test_parse_document():
    doc = parse_document("title: Hi\ntemplate: page.html\n:content:\n# Hi\n\nbody")
    assert doc.metadata == {"title": "Hi", "template": "page.html"}
    assert doc.template_name == "page.html"
    assert doc.elements == (Header(1, (Text("Hi"),)), Break(), Text("body"))


def test_document_to_dict():
    doc = parse_document("template: t\n:content:\n- [a](b)")
    assert doc.to_dict() == {
        "metadata": {"template": "t"},
        "elements": [
            {
                "type": "list",
                "kind": "unordered",
                "marker": "-",
                "items": [[{"type": "link", "text": "a", "target": "b"}]],
            }
        ],
    }

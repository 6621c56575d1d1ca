import pytest

from pughtml.builder import TreeBuilder, build
from pughtml.errors import InternalError
from pughtml.events import (
    Attribute, ClassName, Comment, ElementName, EndOfInput, IdName, Indent,
    IncludeTarget, TagOpen, Text,
)
from pughtml.nodes import Doctype, Document, Element, Include
from pughtml.nodes import Text as TextNode
from pughtml import events


def tag(name, *captures):
    return TagOpen([ElementName(name)] + list(captures))


def test_default_element_is_div():
    document = build([Indent(0), TagOpen([ClassName("box")]), EndOfInput()])
    assert document == Document([Element("div", classes=["box"])])


def test_dedent_pops_every_ancestor_at_or_above_width():
    document = build([
        Indent(0), tag("a"),
        Indent(2), tag("b"),
        Indent(4), tag("c"),
        Indent(2), tag("d"),
        EndOfInput(),
    ])
    assert document == Document([
        Element("a", children=[Element("b", children=[Element("c")]), Element("d")]),
    ])


def test_inconsistent_widths_still_nest_by_comparison():
    document = build([
        Indent(0), tag("a"),
        Indent(4), tag("b"),
        Indent(1), tag("c"),
        EndOfInput(),
    ])
    assert document == Document([Element("a", children=[Element("b"), Element("c")])])


def test_end_of_input_unwinds_whole_stack():
    document = build([
        Indent(0), tag("a"), Indent(2), tag("b"), Indent(4), tag("c"), EndOfInput(),
    ])
    assert document == Document([
        Element("a", children=[Element("b", children=[Element("c")])]),
    ])


def test_id_last_write_wins_in_declaration_order():
    shorthand_first = build([Indent(0), tag("a", IdName("x"), Attribute("id", '"v"')), EndOfInput()])
    explicit_first = build([Indent(0), tag("a", Attribute("id", '"v"'), IdName("x")), EndOfInput()])
    assert shorthand_first.children[0].id == "v"
    assert explicit_first.children[0].id == "x"


def test_classes_append_without_dedup():
    document = build([
        Indent(0),
        tag("a", ClassName("b"), Attribute("class", '"c"'), ClassName("b")),
        EndOfInput(),
    ])
    assert document.children[0].classes == ["b", "c", "b"]


def test_other_attributes_keep_raw_text_and_duplicates():
    document = build([
        Indent(0),
        tag("a", Attribute("href", "'x'"), Attribute("data-k", "1"), Attribute("href", '"y"')),
        EndOfInput(),
    ])
    assert document.children[0].attributes == [("href", "'x'"), ("data-k", "1"), ("href", '"y"')]


def test_comment_suppresses_deeper_lines_only():
    document = build([
        Indent(0), tag("a"),
        Indent(2), Comment(),
        Indent(4), tag("hidden"), Text("hidden text"),
        Indent(4), IncludeTarget("hidden"),
        Indent(6), events.Doctype("html"),
        Indent(2), tag("b"),
        EndOfInput(),
    ])
    assert document == Document([Element("a", children=[Element("b")])])


def test_nested_comment_keeps_outer_watermark():
    document = build([
        Indent(0), Comment(),
        Indent(2), Comment(),
        Indent(4), tag("x"),
        Indent(2), tag("y"),
        Indent(0), tag("z"),
        EndOfInput(),
    ])
    assert document == Document([Element("z")])


def test_comment_does_not_close_open_tags_on_its_own():
    document = build([
        Indent(0), tag("a"),
        Indent(2), Comment(),
        Indent(2), Text("kept"),
        EndOfInput(),
    ])
    assert document == Document([Element("a", children=[TextNode("kept")])])


def test_doctype_text_and_include_attach_to_current_node():
    document = build([
        Indent(0), events.Doctype("html"),
        Indent(0), tag("body"), Text("hi"),
        Indent(2), IncludeTarget("footer"),
        EndOfInput(),
    ])
    assert document == Document([
        Doctype("html"),
        Element("body", children=[TextNode("hi"), Include("footer")]),
    ])


def test_builder_is_reusable():
    builder = TreeBuilder()
    first = builder.build([Indent(0), tag("a"), Indent(2), tag("b"), EndOfInput()])
    second = builder.build([Indent(0), tag("c"), EndOfInput()])
    assert first == Document([Element("a", children=[Element("b")])])
    assert second == Document([Element("c")])


def test_unknown_event_is_an_internal_error():
    class Bogus(events.Event):
        __slots__ = ()

    with pytest.raises(InternalError):
        build([Indent(0), Bogus(), EndOfInput()])

import io

import pytest

from pughtml.errors import OutputError, UnexpandedIncludeError
from pughtml.nodes import VOID_ELEMENTS, Doctype, Document, Element, Include, Text
from pughtml.serializer import HtmlSerializer, serialize, to_html


class BrokenSink:
    def __init__(self, fail_after=0):
        self.written = []
        self.fail_after = fail_after

    def write(self, data):
        if len(self.written) >= self.fail_after:
            raise OSError("disk full")
        self.written.append(data)


def test_opening_tag_order_is_class_id_then_attributes():
    element = Element("a", id="v", classes=["b", "c"],
                      attributes=[("href", "'x'"), ("data-a", "1"), ("href", '"y"')])
    assert to_html(element) == '<a class="b c" id="v" href=\'x\' data-a=1 href="y"></a>'


def test_attribute_values_are_not_escaped():
    element = Element("a", attributes=[("title", '"<b>&"')], children=[Text("<i>raw</i>")])
    assert to_html(element) == '<a title="<b>&"><i>raw</i></a>'


@pytest.mark.parametrize("name", sorted(VOID_ELEMENTS))
def test_void_elements_drop_children_and_closing_tag(name):
    element = Element(name, children=[Text("x"), Element("span")])
    assert to_html(element) == f"<{name}>"


def test_doctype_breaks_text_adjacency():
    document = Document([Text("a"), Doctype("html"), Text("b"), Text("c")])
    assert to_html(document) == "a<!DOCTYPE html>b\nc"


def test_text_merge_state_is_per_parent():
    document = Document([
        Text("a"),
        Element("p", children=[Text("b"), Text("c")]),
        Text("d"),
    ])
    assert to_html(document) == "a<p>b\nc</p>d"


def test_unexpanded_include_fails_fast():
    with pytest.raises(UnexpandedIncludeError) as excinfo:
        to_html(Document([Element("div", children=[Include("nav")])]))
    assert excinfo.value.target == "nav"


def test_serialize_writes_to_any_text_sink():
    buffer = io.StringIO()
    serialize(Document([Element("p", children=[Text("hi")])]), buffer)
    assert buffer.getvalue() == "<p>hi</p>"


def test_sink_failure_is_an_output_error():
    sink = BrokenSink(fail_after=1)
    with pytest.raises(OutputError) as excinfo:
        HtmlSerializer(sink).serialize(Element("p", children=[Text("hi")]))
    assert isinstance(excinfo.value, OSError)
    assert isinstance(excinfo.value.__cause__, OSError)
    assert sink.written == ["<p>"]


def test_closed_sink_is_an_output_error():
    sink = io.StringIO()
    sink.close()
    with pytest.raises(OutputError) as excinfo:
        serialize(Element("p"), sink)
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_unencodable_text_is_an_output_error():
    sink = io.TextIOWrapper(io.BytesIO(), encoding="ascii")
    with pytest.raises(OutputError) as excinfo:
        serialize(Element("p", children=[Text("café")]), sink)
    assert isinstance(excinfo.value.__cause__, UnicodeEncodeError)


def test_text_does_not_merge_across_nested_document():
    element = Element("p", children=[Text("a"), Document([Text("b")]), Text("c")])
    assert to_html(element) == "<p>abc</p>"


def test_leaf_nodes_have_no_children():
    assert Text("x").children == ()
    assert Doctype("html").children == ()
    assert Include("nav").children == ()

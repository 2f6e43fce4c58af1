import pytest

from mucowls.completion.context import (
    NO_CONTEXT,
    AttributeNameContext,
    AttributeValueContext,
    TagContext,
    TokenContextResolver,
)
from mucowls.tokenizer import XmlTokenStream


def resolve(marked: str):
    """Resolve the context at the "|" marker."""
    cursor = marked.index("|")
    text = marked.replace("|", "", 1)
    return TokenContextResolver().resolve(XmlTokenStream(text, cursor))


class TestTagContext:
    def test_tag_name_at_root(self):
        context = resolve("<wid|")

        assert context == TagContext(
            query="wid", token_text="wid", token_offset=3, parent_name="/root$"
        )

    def test_parent_is_nearest_open_element(self):
        context = resolve("<widget>\n  <parameters>\n    <bo|")

        assert isinstance(context, TagContext)
        assert context.parent_name == "parameters"
        assert context.query == "bo"

    def test_cursor_inside_tag_name_uses_whole_token(self):
        context = resolve("<table><r|ow>")

        assert context.query == "row"
        assert context.token_text == "row"
        assert context.token_offset == 1
        assert context.parent_name == "table"

    def test_bare_opening_bracket(self):
        context = resolve("<table>\n  <|")

        assert context == TagContext(
            query="", token_text="", token_offset=0, parent_name="table"
        )

    def test_closing_tag_name_has_no_context(self):
        assert resolve("<table></ta|") is NO_CONTEXT


class TestAttributeNameContext:
    def test_after_whitespace(self):
        context = resolve('<input type="text" |>')

        assert context == AttributeNameContext(
            query="",
            token_text="",
            token_offset=0,
            tag_name="input",
            used_attribute_names=frozenset({"type"}),
            should_replace_existing=False,
        )

    def test_partial_name_collects_attributes_both_ways(self):
        context = resolve('<input id="a" va| type="text" checked/>')

        assert isinstance(context, AttributeNameContext)
        assert context.query == "va"
        assert context.token_text == "va"
        assert context.token_offset == 2
        assert context.used_attribute_names == {"id", "type", "checked"}
        assert context.should_replace_existing is False

    def test_attribute_followed_by_equals_is_replaced(self):
        context = resolve('<input ty|pe="text" value="a">')

        assert isinstance(context, AttributeNameContext)
        assert context.should_replace_existing is True
        assert context.query == "type"
        assert context.token_offset == 2

    def test_name_under_cursor_is_not_used(self):
        context = resolve('<input ty|pe="text" value="a">')

        assert "type" not in context.used_attribute_names
        assert context.used_attribute_names == {"value"}

    def test_tag_without_attributes(self):
        context = resolve("<widget |")

        assert isinstance(context, AttributeNameContext)
        assert context.tag_name == "widget"
        assert context.used_attribute_names == frozenset()

    def test_multiline_start_tag(self):
        context = resolve('<widget\n    name="w"\n    |\n>')

        assert isinstance(context, AttributeNameContext)
        assert context.used_attribute_names == {"name"}


class TestAttributeValueContext:
    def test_inside_quotes(self):
        context = resolve('<input type="te|xt">')

        assert context == AttributeValueContext(
            query="text",
            token_text='"text"',
            token_offset=3,
            tag_name="input",
            attribute_name="type",
        )

    def test_empty_quotes(self):
        context = resolve('<bool default="|"/>')

        assert isinstance(context, AttributeValueContext)
        assert context.query == ""
        assert context.token_text == '""'
        assert context.token_offset == 1
        assert context.tag_name == "bool"
        assert context.attribute_name == "default"

    def test_lone_opening_quote(self):
        context = resolve('<bool default="|')

        assert isinstance(context, AttributeValueContext)
        assert context.token_text == '"'
        assert context.attribute_name == "default"

    def test_spaces_around_equals(self):
        context = resolve('<list type = "ra|">')

        assert isinstance(context, AttributeValueContext)
        assert context.attribute_name == "type"
        assert context.query == "ra"


@pytest.mark.parametrize(
    "marked",
    [
        "|<widget>",                      # start of document
        '<input type="text"|>',           # after the closing quote
        '<input type |="text">',          # before "="
        '<input type= |"text">',          # before the value
        '<input type= |>',                # after "=", value missing
        '<input type= |',                 # after "=", tag unfinished
        "<input>some text |</input>",     # element content
        "<input></input> |",              # after a closed element
        '<input x| b="',                  # unterminated quote ahead
        "<input> <!-- a| -->",            # inside a comment
    ],
)
def test_no_context(marked):
    assert resolve(marked) is NO_CONTEXT

from mucowls.completion.tokens import Token, TokenKind
from mucowls.tokenizer import XmlTokenizer, XmlTokenStream


def kinds_and_text(text: str) -> list[tuple[TokenKind, str]]:
    return [(t.kind, t.text) for t in XmlTokenizer().tokenize(text)]


def test_start_tag_with_attribute():
    tokens = XmlTokenizer().tokenize('<widget name="x">')

    assert tokens == [
        Token(TokenKind.TAG_BRACKET, "<", 0),
        Token(TokenKind.TAG_NAME, "widget", 1),
        Token(TokenKind.WHITESPACE, " ", 7),
        Token(TokenKind.ATTRIBUTE_NAME, "name", 8),
        Token(TokenKind.OTHER, "=", 12),
        Token(TokenKind.ATTRIBUTE_VALUE, '"x"', 13),
        Token(TokenKind.TAG_BRACKET, ">", 16),
    ]


def test_self_closing_and_closing_tags():
    assert kinds_and_text("<a/></b>") == [
        (TokenKind.TAG_BRACKET, "<"),
        (TokenKind.TAG_NAME, "a"),
        (TokenKind.TAG_BRACKET, "/>"),
        (TokenKind.TAG_BRACKET, "</"),
        (TokenKind.TAG_NAME, "b"),
        (TokenKind.TAG_BRACKET, ">"),
    ]


def test_text_content():
    assert kinds_and_text("<a>hello world</a>") == [
        (TokenKind.TAG_BRACKET, "<"),
        (TokenKind.TAG_NAME, "a"),
        (TokenKind.TAG_BRACKET, ">"),
        (TokenKind.OTHER, "hello"),
        (TokenKind.WHITESPACE, " "),
        (TokenKind.OTHER, "world"),
        (TokenKind.TAG_BRACKET, "</"),
        (TokenKind.TAG_NAME, "a"),
        (TokenKind.TAG_BRACKET, ">"),
    ]


def test_lone_quote_is_string_quote():
    assert kinds_and_text('<a b="')[-1] == (TokenKind.STRING_QUOTE, '"')


def test_unterminated_value_stops_at_line_end():
    assert kinds_and_text('<a b="xy\n<c>')[5:7] == [
        (TokenKind.ATTRIBUTE_VALUE, '"xy'),
        (TokenKind.WHITESPACE, "\n"),
    ]


def test_single_quoted_value():
    assert (TokenKind.ATTRIBUTE_VALUE, "'on'") in kinds_and_text("<a b='on'>")


def test_comments_and_declarations_are_opaque():
    assert kinds_and_text('<?xml version="1.0"?><!-- <b> --><a>') == [
        (TokenKind.OTHER, '<?xml version="1.0"?>'),
        (TokenKind.OTHER, "<!-- <b> -->"),
        (TokenKind.TAG_BRACKET, "<"),
        (TokenKind.TAG_NAME, "a"),
        (TokenKind.TAG_BRACKET, ">"),
    ]


def test_bare_bracket_without_name():
    assert kinds_and_text("<table>\n<") == [
        (TokenKind.TAG_BRACKET, "<"),
        (TokenKind.TAG_NAME, "table"),
        (TokenKind.TAG_BRACKET, ">"),
        (TokenKind.WHITESPACE, "\n"),
        (TokenKind.TAG_BRACKET, "<"),
    ]


def test_tokens_cover_the_whole_text():
    text = '<widget a="1" b>\n  text <x/> & more\n</widget>'
    tokens = XmlTokenizer().tokenize(text)

    assert "".join(t.text for t in tokens) == text
    for previous, current in zip(tokens, tokens[1:]):
        assert previous.end == current.start


class TestXmlTokenStream:
    def test_token_index_at(self):
        stream = XmlTokenStream("<a b>", cursor=0)

        assert stream.token_index_at(0) is None
        assert stream.token(stream.token_index_at(1)).text == "<"
        assert stream.token(stream.token_index_at(2)).text == "a"
        assert stream.token(stream.token_index_at(4)).text == "b"
        assert stream.token(stream.token_index_at(5)).text == ">"
        assert stream.token_index_at(6) is None

    def test_navigation_skipping_whitespace(self):
        stream = XmlTokenStream('<a  b = "c">', cursor=0)
        b = 3
        assert stream.token(b).text == "b"

        assert stream.token(stream.next_index(b)).kind is TokenKind.WHITESPACE
        assert stream.token(stream.next_index(b, skip_whitespace=True)).text == "="
        assert stream.token(stream.prev_index(b, skip_whitespace=True)).text == "a"
        assert stream.prev_index(0) is None
        assert stream.next_index(len(stream.tokens) - 1) is None

    def test_ancestor_tags(self):
        text = "<widget><parameters><bool/><list></list><"
        stream = XmlTokenStream(text, cursor=len(text))
        last = len(stream.tokens) - 1

        assert stream.ancestor_tags(last) == ["parameters", "widget"]

    def test_ancestor_tags_at_root(self):
        stream = XmlTokenStream("<widget></widget><", cursor=18)
        assert stream.ancestor_tags(len(stream.tokens) - 1) == []

    def test_unbalanced_closing_tag_is_ignored(self):
        text = "<a></b><"
        stream = XmlTokenStream(text, cursor=len(text))
        assert stream.ancestor_tags(len(stream.tokens) - 1) == ["a"]

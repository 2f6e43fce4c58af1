"""
XML tokenizer adapter.

Splits MuCow document text into the tokens the completion core walks, in
the style of an editor's XML mode: brackets, tag names and attribute names
are separate tokens, quoted values keep their quotes, and whitespace is its
own token. The tokenizer never fails; text it cannot classify becomes OTHER.
"""

from __future__ import annotations

import re
from bisect import bisect_left

from mucowls.completion.tokens import Token, TokenKind


TAG_NAME_PATTERN = re.compile(r"[A-Za-z_:][\w:.\-]*")
ATTRIBUTE_NAME_PATTERN = re.compile(r"[^\s=<>/\"']+")
WHITESPACE_PATTERN = re.compile(r"\s+")
TEXT_PATTERN = re.compile(r"[^<\s]+")

# Markup that is opaque to completion, with its terminator.
OPAQUE_SECTIONS = (
    ("<!--", "-->"),
    ("<![CDATA[", "]]>"),
    ("<?", "?>"),
    ("<!", ">"),
)


class XmlTokenizer:
    """Tokenize a whole document into contiguous tokens."""

    def tokenize(self, text: str) -> list[Token]:
        tokens: list[Token] = []
        pos = 0
        in_tag = False

        while pos < len(text):
            if in_tag:
                pos, in_tag = self._tag_token(text, pos, tokens)
            else:
                pos, in_tag = self._content_token(text, pos, tokens)

        return tokens

    def _content_token(
        self, text: str, pos: int, tokens: list[Token]
    ) -> tuple[int, bool]:
        for opener, closer in OPAQUE_SECTIONS:
            if text.startswith(opener, pos):
                end = text.find(closer, pos + len(opener))
                end = len(text) if end == -1 else end + len(closer)
                tokens.append(Token(TokenKind.OTHER, text[pos:end], pos))
                return end, False

        if text.startswith("<", pos):
            return self._open_tag(text, pos, tokens), True

        match = WHITESPACE_PATTERN.match(text, pos)
        if match:
            tokens.append(Token(TokenKind.WHITESPACE, match.group(), pos))
            return match.end(), False

        match = TEXT_PATTERN.match(text, pos)
        tokens.append(Token(TokenKind.OTHER, match.group(), pos))  # type: ignore[union-attr]
        return match.end(), False  # type: ignore[union-attr]

    def _open_tag(self, text: str, pos: int, tokens: list[Token]) -> int:
        """Emit "<" or "</" followed by the tag name, if one is there."""
        bracket = "</" if text.startswith("</", pos) else "<"
        tokens.append(Token(TokenKind.TAG_BRACKET, bracket, pos))
        pos += len(bracket)

        match = TAG_NAME_PATTERN.match(text, pos)
        if match:
            tokens.append(Token(TokenKind.TAG_NAME, match.group(), pos))
            pos = match.end()
        return pos

    def _tag_token(
        self, text: str, pos: int, tokens: list[Token]
    ) -> tuple[int, bool]:
        char = text[pos]

        match = WHITESPACE_PATTERN.match(text, pos)
        if match:
            tokens.append(Token(TokenKind.WHITESPACE, match.group(), pos))
            return match.end(), True

        if text.startswith("/>", pos):
            tokens.append(Token(TokenKind.TAG_BRACKET, "/>", pos))
            return pos + 2, False

        if char == ">":
            tokens.append(Token(TokenKind.TAG_BRACKET, ">", pos))
            return pos + 1, False

        if char == "<":
            # Previous tag was never closed; start the next one.
            return self._open_tag(text, pos, tokens), True

        if char in "\"'":
            return self._quoted_value(text, pos, tokens), True

        match = ATTRIBUTE_NAME_PATTERN.match(text, pos)
        if match:
            tokens.append(Token(TokenKind.ATTRIBUTE_NAME, match.group(), pos))
            return match.end(), True

        # "=", or a "/" not followed by ">"
        tokens.append(Token(TokenKind.OTHER, char, pos))
        return pos + 1, True

    def _quoted_value(self, text: str, pos: int, tokens: list[Token]) -> int:
        quote = text[pos]
        end = pos + 1
        while end < len(text) and text[end] not in (quote, "<", "\n"):
            end += 1

        if end < len(text) and text[end] == quote:
            tokens.append(Token(TokenKind.ATTRIBUTE_VALUE, text[pos:end + 1], pos))
            return end + 1

        # Unterminated: the value stops at the end of the line or the next tag.
        kind = TokenKind.STRING_QUOTE if end == pos + 1 else TokenKind.ATTRIBUTE_VALUE
        tokens.append(Token(kind, text[pos:end], pos))
        return end


class XmlTokenStream:
    """
    TokenNavigator over one tokenized document.

    Built per completion request from the current document text and cursor
    offset; nothing is kept between requests.
    """

    def __init__(
        self,
        text: str,
        cursor: int,
        tokenizer: XmlTokenizer | None = None,
    ) -> None:
        self.text = text
        self._cursor = cursor
        self.tokens = (tokenizer or XmlTokenizer()).tokenize(text)
        self._starts = [token.start for token in self.tokens]

    @property
    def cursor(self) -> int:
        return self._cursor

    def token_index_at(self, offset: int) -> int | None:
        # The token that ends at or spans the offset: start < offset <= end.
        index = bisect_left(self._starts, offset) - 1
        if index < 0:
            return None
        if offset > self.tokens[index].end:
            return None
        return index

    def token(self, index: int) -> Token:
        return self.tokens[index]

    def next_index(self, index: int, skip_whitespace: bool = False) -> int | None:
        index += 1
        while index < len(self.tokens):
            if not (skip_whitespace and self._is_whitespace(index)):
                return index
            index += 1
        return None

    def prev_index(self, index: int, skip_whitespace: bool = False) -> int | None:
        index -= 1
        while index >= 0:
            if not (skip_whitespace and self._is_whitespace(index)):
                return index
            index -= 1
        return None

    def ancestor_tags(self, index: int) -> list[str]:
        stack: list[str] = []
        pending: str | None = None
        closing = False

        for token in self.tokens[:index]:
            if token.kind is TokenKind.TAG_BRACKET:
                if token.text == ">" and pending is not None and not closing:
                    stack.append(pending)
                pending = None
                closing = token.text == "</"
            elif token.kind is TokenKind.TAG_NAME:
                if closing:
                    if token.text in stack:
                        # Close the element and anything left open inside it.
                        del stack[len(stack) - 1 - stack[::-1].index(token.text):]
                else:
                    pending = token.text

        return stack[::-1]

    def _is_whitespace(self, index: int) -> bool:
        return self.tokens[index].kind is TokenKind.WHITESPACE

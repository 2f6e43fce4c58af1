"""
Completion context resolution.

Given the tokens around the cursor, decide what kind of completion applies:

    <wid|                      -> TagContext (parent "/root$")
    <text na|                  -> AttributeNameContext (tag "text")
    <text name="" |            -> AttributeNameContext, "name" already used
    <bool default="|"          -> AttributeValueContext ("bool", "default")
    </text|  or  text content  -> NO_CONTEXT

Resolution is total: anything the resolver cannot make sense of ends the
completion session with NO_CONTEXT instead of raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from mucowls.catalog import ROOT_PARENT
from mucowls.completion.tokens import Token, TokenKind, TokenNavigator


VALUE_QUERY_STRIP = re.compile(r"[\"'<>\\]")


@dataclass(frozen=True)
class ResolvedContext:
    """
    Fields shared by every resolved context.

    Attributes:
        query: Prefix the candidates must start with.
        token_text: Text of the token a chosen hint replaces ("" when the
            hint is inserted at an empty position).
        token_offset: Cursor offset into token_text.
    """

    query: str
    token_text: str
    token_offset: int


@dataclass(frozen=True)
class TagContext(ResolvedContext):
    parent_name: str


@dataclass(frozen=True)
class AttributeNameContext(ResolvedContext):
    tag_name: str
    used_attribute_names: frozenset[str]
    should_replace_existing: bool = False


@dataclass(frozen=True)
class AttributeValueContext(ResolvedContext):
    tag_name: str
    attribute_name: str


@dataclass(frozen=True)
class NoContext:
    """Nothing to complete at the cursor."""


NO_CONTEXT = NoContext()

CompletionContext = Union[
    TagContext, AttributeNameContext, AttributeValueContext, NoContext
]


class TokenContextResolver:
    """Turns the token neighborhood of the cursor into a CompletionContext."""

    def resolve(self, navigator: TokenNavigator) -> CompletionContext:
        cursor = navigator.cursor
        index = navigator.token_index_at(cursor)
        if index is None:
            return NO_CONTEXT

        token = navigator.token(index)

        if token.kind is TokenKind.TAG_NAME:
            return self._tag_context(navigator, index, token)

        if (
            token.kind is TokenKind.TAG_BRACKET
            and token.text == "<"
            and token.end == cursor
        ):
            # "<" just typed, no name yet
            return TagContext(
                query="",
                token_text="",
                token_offset=0,
                parent_name=self._parent_name(navigator, index),
            )

        return self._attribute_context(navigator, index, token)

    # ===== Tag names =====

    def _tag_context(
        self, navigator: TokenNavigator, index: int, token: Token
    ) -> CompletionContext:
        prev = navigator.prev_index(index)
        if prev is None or not _is_bracket(navigator.token(prev), "<"):
            # closing tag names are not completed
            return NO_CONTEXT

        return TagContext(
            query=token.text.strip().replace("<", ""),
            token_text=token.text,
            token_offset=token.offset_from(navigator.cursor),
            parent_name=self._parent_name(navigator, prev),
        )

    def _parent_name(self, navigator: TokenNavigator, index: int) -> str:
        ancestors = navigator.ancestor_tags(index)
        return ancestors[0] if ancestors else ROOT_PARENT

    # ===== Attributes =====

    def _attribute_context(
        self, navigator: TokenNavigator, index: int, token: Token
    ) -> CompletionContext:
        cursor = navigator.cursor

        if token.kind in (TokenKind.ATTRIBUTE_VALUE, TokenKind.STRING_QUOTE):
            if _is_closed_value(token) and token.end == cursor:
                # after the closing quote
                return NO_CONTEXT
            attribute_name = self._attribute_of_value(navigator, index)
            if attribute_name is None:
                return NO_CONTEXT
        elif token.kind in (TokenKind.ATTRIBUTE_NAME, TokenKind.WHITESPACE):
            attribute_name = None
        else:
            return NO_CONTEXT

        should_replace = False
        following = navigator.next_index(index, skip_whitespace=True)
        following_token = navigator.token(following) if following is not None else None

        if attribute_name is None:
            # A name cannot go where a value is being assigned.
            preceding = navigator.prev_index(index, skip_whitespace=True)
            if preceding is not None and _is_equals(navigator.token(preceding)):
                return NO_CONTEXT

        if token.kind is TokenKind.WHITESPACE and following_token is not None:
            # Stop if the cursor is right before "=" or an attribute value.
            if _is_equals(following_token) or following_token.kind in (
                TokenKind.ATTRIBUTE_VALUE,
                TokenKind.STRING_QUOTE,
            ):
                return NO_CONTEXT

        if token.kind is TokenKind.ATTRIBUTE_NAME and following_token is not None:
            # The name already has a value; only the name itself gets replaced.
            should_replace = _is_equals(following_token)

        found = self._look_back(navigator, index)
        if found is None:
            return NO_CONTEXT
        tag_name, used = found

        if not self._look_ahead(navigator, index, used):
            return NO_CONTEXT

        if attribute_name is not None:
            return AttributeValueContext(
                query=VALUE_QUERY_STRIP.sub("", token.text.strip()),
                token_text=token.text,
                token_offset=token.offset_from(cursor),
                tag_name=tag_name,
                attribute_name=attribute_name,
            )

        if token.kind is TokenKind.WHITESPACE:
            token_text, token_offset = "", 0
        else:
            token_text, token_offset = token.text, token.offset_from(cursor)

        return AttributeNameContext(
            query=token_text.strip(),
            token_text=token_text,
            token_offset=token_offset,
            tag_name=tag_name,
            used_attribute_names=frozenset(used),
            should_replace_existing=should_replace,
        )

    def _attribute_of_value(
        self, navigator: TokenNavigator, index: int
    ) -> str | None:
        """Name of the attribute a value token is assigned to."""
        equals = navigator.prev_index(index, skip_whitespace=True)
        if equals is None or not _is_equals(navigator.token(equals)):
            return None

        name = navigator.prev_index(equals, skip_whitespace=True)
        if name is None:
            return None

        name_token = navigator.token(name)
        if name_token.kind is not TokenKind.ATTRIBUTE_NAME:
            return None
        return name_token.text

    def _look_back(
        self, navigator: TokenNavigator, index: int
    ) -> tuple[str, list[str]] | None:
        """Walk back to the tag name, collecting the attributes on the way."""
        used: list[str] = []
        current = navigator.prev_index(index)

        while current is not None:
            token = navigator.token(current)

            if token.kind is TokenKind.TAG_BRACKET and (
                token.text == "</" or ">" in token.text
            ):
                # closing tag, or cursor in tag content
                return None

            if token.kind is TokenKind.ATTRIBUTE_NAME:
                used.append(token.text)

            if token.kind is TokenKind.TAG_NAME:
                prev = navigator.prev_index(current)
                if prev is not None and _is_bracket(navigator.token(prev), "<"):
                    return token.text, used
                return None

            current = navigator.prev_index(current)

        return None

    def _look_ahead(
        self, navigator: TokenNavigator, index: int, used: list[str]
    ) -> bool:
        """Collect the attributes after the cursor up to the end of the tag."""
        current = navigator.next_index(index)

        while current is not None:
            token = navigator.token(current)

            if token.kind is TokenKind.STRING_QUOTE:
                return False

            # Own closing bracket, or the opening bracket of the next tag.
            if token.kind is TokenKind.TAG_BRACKET and (
                ">" in token.text or token.text in ("<", "</")
            ):
                break

            if token.kind is TokenKind.ATTRIBUTE_NAME and token.text not in used:
                used.append(token.text)

            current = navigator.next_index(current)

        return True


def _is_bracket(token: Token, text: str) -> bool:
    return token.kind is TokenKind.TAG_BRACKET and token.text == text


def _is_equals(token: Token) -> bool:
    return token.kind is TokenKind.OTHER and token.text == "="


def _is_closed_value(token: Token) -> bool:
    text = token.text
    return len(text) >= 2 and text[0] in "\"'" and text[-1] == text[0]

"""
Lexical tokens and the navigation capability the completion core relies on.

The completion core never tokenizes text itself. It walks tokens through a
TokenNavigator supplied by the caller, which keeps the context resolver
independent of whichever tokenizer produced the tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class TokenKind(Enum):
    TAG_BRACKET = "tag-bracket"         # <  </  >  />
    TAG_NAME = "tag-name"
    ATTRIBUTE_NAME = "attribute-name"
    ATTRIBUTE_VALUE = "attribute-value" # quoted, quotes included
    STRING_QUOTE = "string-quote"       # a lone, unterminated quote
    WHITESPACE = "whitespace"
    OTHER = "other"                     # "=", text content, comments


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    def offset_from(self, cursor: int) -> int:
        """Distance from the start of this token to the cursor."""
        return cursor - self.start


class TokenNavigator(Protocol):
    """
    Navigation over the tokens of one document, for one request.

    Tokens are addressed by index. Movement returns None when there is no
    further token in that direction.
    """

    @property
    def cursor(self) -> int:
        """Cursor position as an offset into the document text."""
        ...

    def token_index_at(self, offset: int) -> int | None:
        """Index of the token that ends at or contains the offset."""
        ...

    def token(self, index: int) -> Token:
        ...

    def next_index(self, index: int, skip_whitespace: bool = False) -> int | None:
        ...

    def prev_index(self, index: int, skip_whitespace: bool = False) -> int | None:
        ...

    def ancestor_tags(self, index: int) -> list[str]:
        """Names of the elements still open before the token, innermost first."""
        ...

"""Completion core: context resolution, candidate engines and hint insertion."""
from .attribute_hints import AttributeCompletionEngine
from .context import (
    NO_CONTEXT,
    AttributeNameContext,
    AttributeValueContext,
    CompletionContext,
    NoContext,
    TagContext,
    TokenContextResolver,
)
from .hints import HintList
from .insertion import EditBuffer, HintInsertionEngine, TextBuffer
from .tag_hints import TagCompletionEngine
from .tokens import Token, TokenKind, TokenNavigator

__all__ = [
    "NO_CONTEXT",
    "AttributeCompletionEngine",
    "AttributeNameContext",
    "AttributeValueContext",
    "CompletionContext",
    "EditBuffer",
    "HintInsertionEngine",
    "HintList",
    "NoContext",
    "TagCompletionEngine",
    "TagContext",
    "TextBuffer",
    "Token",
    "TokenContextResolver",
    "TokenKind",
    "TokenNavigator",
]

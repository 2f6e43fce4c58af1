"""Tokenizer adapter providing token navigation over document text."""
from .xml_tokenizer import XmlTokenizer, XmlTokenStream

__all__ = ["XmlTokenizer", "XmlTokenStream"]

"""
XPath package
-------------
A small expression DSL for building XPath queries and the renderer that
serializes them.
"""

from .expression import (
    Expression,
    Query,
    Union,
    all_of,
    any_of,
    anywhere,
    attr,
    child,
    current,
    descendant,
    literal,
    string,
    text,
    union,
)
from .renderer import Renderer

__all__ = [
    "Expression",
    "Query",
    "Union",
    "Renderer",
    "all_of",
    "any_of",
    "anywhere",
    "attr",
    "child",
    "current",
    "descendant",
    "literal",
    "string",
    "text",
    "union",
]

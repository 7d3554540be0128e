# selectorkit/selectors/__init__.py
"""
Selectors package
-----------------
Named selectors, their filters and shared filter sets, plus the built-in
selector catalogue.
"""

from .errors import (
    Ambiguous,
    ElementNotFound,
    InvalidOptionValue,
    InvalidQueryOption,
    NoExpressionGenerator,
    SelectorError,
    UnknownFilterSet,
    UnknownSelector,
)
from .filter import BOOLEAN, MISSING, Filter
from .filter_set import FilterSet, FilterSetRegistry
from .selector import CSS, XPATH, CSSExpression, Selector, SelectorBuilder, SelectorRegistry, XPathExpression
from .field import locate_field
from .builtin import build_registry, get_registry, register_builtins

__all__ = [
    "Ambiguous",
    "ElementNotFound",
    "InvalidOptionValue",
    "InvalidQueryOption",
    "NoExpressionGenerator",
    "SelectorError",
    "UnknownFilterSet",
    "UnknownSelector",
    "BOOLEAN",
    "MISSING",
    "Filter",
    "FilterSet",
    "FilterSetRegistry",
    "CSS",
    "XPATH",
    "CSSExpression",
    "XPathExpression",
    "Selector",
    "SelectorBuilder",
    "SelectorRegistry",
    "locate_field",
    "build_registry",
    "get_registry",
    "register_builtins",
]

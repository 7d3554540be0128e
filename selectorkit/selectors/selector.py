# selectorkit/selectors/selector.py
from __future__ import annotations

"""Selectors and their registry
------------------------------
A Selector turns a locator + options into a query expression (XPath or CSS)
and owns the filters that narrow the evaluated matches. Selectors are
configured through a SelectorBuilder inside a registration function and
frozen once the function returns:

    registry = SelectorRegistry()

    @registry.add("link")
    def _link(s: SelectorBuilder) -> None:
        s.set_label("link")

        @s.xpath("href")
        def _expr(locator, options):
            ...

        @s.filter("href")
        def _href(node, value, options):
            return node.attribute("href") == value
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from selectorkit.selectors.errors import NoExpressionGenerator, UnknownSelector
from selectorkit.selectors.filter import Filter, Matcher
from selectorkit.selectors.filter_set import Describer, FilterSet, FilterSetRegistry
from selectorkit.utils.config import get_settings
from selectorkit.utils.logger import get_logger

log = get_logger(__name__)

XPATH = "xpath"
CSS = "css"

Generator = Callable[[Any, Mapping[str, Any]], Any]
Predicate = Callable[[Any], Any]


# ---------- Expression definitions (tagged union; None means unset) ----------

@dataclass(frozen=True)
class XPathExpression:
    generator: Generator
    filters: Tuple[str, ...] = ()
    format: ClassVar[str] = XPATH


@dataclass(frozen=True)
class CSSExpression:
    generator: Generator
    filters: Tuple[str, ...] = ()
    format: ClassVar[str] = CSS


ExpressionDef = Union[XPathExpression, CSSExpression]


def _flatten(names: Iterable[Any]) -> Tuple[str, ...]:
    out = []
    for n in names:
        if isinstance(n, (list, tuple, set, frozenset)):
            out.extend(_flatten(n))
        else:
            out.append(str(n))
    return tuple(out)


# ---------- Selector ----------

@dataclass(frozen=True)
class Selector:
    name: str
    filter_set: FilterSet = field(compare=False, repr=False)
    expression: Optional[ExpressionDef] = None
    match_predicate: Optional[Predicate] = field(default=None, compare=False, repr=False)
    label: Optional[str] = None

    @property
    def format(self) -> Optional[str]:
        return self.expression.format if self.expression else None

    @property
    def expression_filters(self) -> Tuple[str, ...]:
        return self.expression.filters if self.expression else ()

    @property
    def xpath_expression(self) -> Optional[Generator]:
        """The XPath generator, or None unless XPath is the active format."""
        return self.expression.generator if isinstance(self.expression, XPathExpression) else None

    @property
    def css_expression(self) -> Optional[Generator]:
        """The CSS generator, or None unless CSS is the active format."""
        return self.expression.generator if isinstance(self.expression, CSSExpression) else None

    @property
    def custom_filters(self) -> Mapping[str, Filter]:
        return MappingProxyType(self.filter_set.filters)

    def call(self, locator: Any = None, options: Optional[Mapping[str, Any]] = None, *, strict: Optional[bool] = None) -> Any:
        """
        Build the query for `locator`.

        The generator receives the whole options bag. A selector without an
        expression logs a warning and returns None, or raises
        NoExpressionGenerator when strict (defaults to STRICT_EXPRESSIONS).
        """
        if self.expression is None:
            if strict is None:
                strict = get_settings().STRICT_EXPRESSIONS
            if strict:
                raise NoExpressionGenerator(self.name)
            log.warning(f"Selector {self.name!r} has no format")
            return None
        return self.expression.generator(locator, dict(options or {}))

    def matches(self, locator: Any) -> bool:
        """Whether auto-detection should pick this selector for `locator`."""
        if self.match_predicate is None:
            return False
        return bool(self.match_predicate(locator))

    def description(self, options: Optional[Mapping[str, Any]] = None) -> str:
        return self.filter_set.description(options or {})


# ---------- Builder ----------

class SelectorBuilder:
    """Mutable configuration surface handed to registration functions."""

    def __init__(self, name: str, filter_sets: FilterSetRegistry) -> None:
        self.name = name
        self._filter_sets = filter_sets
        self._own = FilterSet(name)
        self._expression: Optional[ExpressionDef] = None
        self._match: Optional[Predicate] = None
        self._label: Optional[str] = None

    @classmethod
    def from_selector(cls, selector: Selector, filter_sets: FilterSetRegistry) -> "SelectorBuilder":
        b = cls(selector.name, filter_sets)
        b._own = selector.filter_set.copy()
        b._expression = selector.expression
        b._match = selector.match_predicate
        b._label = selector.label
        return b

    # ---- expressions ----

    def xpath(self, *expression_filters: Any) -> Callable[[Generator], Generator]:
        def decorator(generator: Generator) -> Generator:
            self._expression = XPathExpression(generator, _flatten(expression_filters))
            return generator
        return decorator

    def css(self, *expression_filters: Any) -> Callable[[Generator], Generator]:
        def decorator(generator: Generator) -> Generator:
            self._expression = CSSExpression(generator, _flatten(expression_filters))
            return generator
        return decorator

    @property
    def format(self) -> Optional[str]:
        return self._expression.format if self._expression else None

    @property
    def expression_filters(self) -> Tuple[str, ...]:
        return self._expression.filters if self._expression else ()

    @property
    def xpath_expression(self) -> Optional[Generator]:
        return self._expression.generator if isinstance(self._expression, XPathExpression) else None

    @property
    def css_expression(self) -> Optional[Generator]:
        return self._expression.generator if isinstance(self._expression, CSSExpression) else None

    # ---- detection & label ----

    def match(self, predicate: Predicate) -> Predicate:
        self._match = predicate
        return predicate

    @property
    def match_predicate(self) -> Optional[Predicate]:
        return self._match

    def set_label(self, label: str) -> None:
        self._label = label

    @property
    def label(self) -> Optional[str]:
        return self._label

    # ---- filters ----

    def filter(self, name: str, *types: str, **options: Any) -> Callable[[Matcher], Matcher]:
        return self._own.filter(name, *types, **options)

    def filter_set(self, name: str, filters_to_use: Union[str, Iterable[str], None] = None) -> None:
        """
        Pull filters from a shared filter set: all of them, or only the named
        ones. Every description of the shared set is appended either way.
        """
        shared = self._filter_sets.get(name)
        if isinstance(filters_to_use, str):
            filters_to_use = [filters_to_use]
        wanted = None if filters_to_use is None else set(_flatten(filters_to_use))
        for fname, f in shared.filters.items():
            if wanted is None or fname in wanted:
                self._own.add_filter(f)
        for desc in shared.descriptions:
            self._own.describe(desc)

    def describe(self, fn: Describer) -> Describer:
        return self._own.describe(fn)

    @property
    def custom_filters(self) -> Dict[str, Filter]:
        return self._own.filters

    def build(self) -> Selector:
        return Selector(
            name=self.name,
            filter_set=self._own.copy(),
            expression=self._expression,
            match_predicate=self._match,
            label=self._label,
        )


# ---------- Registry ----------

Configure = Callable[[SelectorBuilder], Any]


class SelectorRegistry:
    """Named selectors plus the shared filter sets they draw on."""

    def __init__(self, filter_sets: Optional[FilterSetRegistry] = None) -> None:
        self.filter_sets = filter_sets if filter_sets is not None else FilterSetRegistry()
        self._selectors: Dict[str, Selector] = {}

    def add(self, name: str, configure: Optional[Configure] = None):
        """
        Register a selector. Runs `configure` immediately against a builder and
        stores the frozen result, replacing any selector of the same name.
        Without `configure`, returns a decorator.
        """
        if configure is None:
            return lambda fn: self.add(name, fn)
        key = str(name)
        builder = SelectorBuilder(key, self.filter_sets)
        configure(builder)
        selector = builder.build()
        if key in self._selectors:
            log.debug(f"Replacing selector {key!r}")
        self._selectors[key] = selector
        log.debug(f"Registered selector {key!r} (format={selector.format})")
        return selector

    def update(self, name: str, configure: Optional[Configure] = None):
        """Reopen an existing selector for further configuration."""
        if configure is None:
            return lambda fn: self.update(name, fn)
        current = self.get(name)
        builder = SelectorBuilder.from_selector(current, self.filter_sets)
        configure(builder)
        selector = builder.build()
        self._selectors[current.name] = selector
        log.debug(f"Updated selector {current.name!r}")
        return selector

    def remove(self, name: str) -> None:
        if self._selectors.pop(str(name), None) is not None:
            log.debug(f"Removed selector {str(name)!r}")

    def all(self) -> Dict[str, Selector]:
        return self._selectors

    def get(self, name: str) -> Selector:
        try:
            return self._selectors[str(name)]
        except KeyError:
            raise UnknownSelector(str(name), self._selectors) from None

    def detect(self, locator: Any) -> Optional[Selector]:
        """First registered selector whose match predicate accepts `locator`."""
        for selector in self._selectors.values():
            if selector.matches(locator):
                return selector
        return None

    def __contains__(self, name: object) -> bool:
        return str(name) in self._selectors

    def __iter__(self) -> Iterator[str]:
        return iter(self._selectors)

    def __len__(self) -> int:
        return len(self._selectors)

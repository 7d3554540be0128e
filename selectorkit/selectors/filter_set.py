# selectorkit/selectors/filter_set.py
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from selectorkit.selectors.errors import UnknownFilterSet
from selectorkit.selectors.filter import Filter, Matcher
from selectorkit.utils.logger import get_logger

log = get_logger(__name__)

Describer = Callable[[Mapping[str, Any]], str]


class FilterSet:
    """Named bundle of filters plus the fragments that describe them."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.filters: Dict[str, Filter] = {}
        self.descriptions: List[Describer] = []

    def __repr__(self) -> str:
        return f"FilterSet({self.name!r}, filters={list(self.filters)})"

    def filter(self, name: str, *types: str, **options: Any) -> Callable[[Matcher], Matcher]:
        """
        Register a filter; used as a decorator around the matcher.

            @fs.filter("checked", "boolean")
            def _checked(node, value, options):
                return value == node.checked()
        """
        def decorator(matcher: Matcher) -> Matcher:
            self.add_filter(Filter.build(name, matcher, *types, **options))
            return matcher
        return decorator

    def add_filter(self, f: Filter) -> None:
        self.filters[f.name] = f

    def describe(self, fn: Describer) -> Describer:
        self.descriptions.append(fn)
        return fn

    def description(self, options: Optional[Mapping[str, Any]] = None) -> str:
        opts = options or {}
        parts = (str(d(opts) or "") for d in self.descriptions)
        return " ".join(p for p in parts if p)

    def copy(self, name: Optional[str] = None) -> "FilterSet":
        other = FilterSet(name or self.name)
        other.filters = dict(self.filters)
        other.descriptions = list(self.descriptions)
        return other


class FilterSetRegistry:
    """Shared, named filter sets that selectors can pull filters from."""

    def __init__(self) -> None:
        self._sets: Dict[str, FilterSet] = {}

    def add(self, name: str, configure: Optional[Callable[[FilterSet], Any]] = None) -> FilterSet:
        """Create-or-fetch `name`, then run `configure` against it."""
        key = str(name)
        fs = self._sets.get(key)
        if fs is None:
            fs = self._sets[key] = FilterSet(key)
            log.debug(f"Registered filter set {key!r}")
        if configure is not None:
            configure(fs)
        return fs

    def get(self, name: str) -> FilterSet:
        try:
            return self._sets[str(name)]
        except KeyError:
            raise UnknownFilterSet(str(name), self._sets) from None

    def remove(self, name: str) -> None:
        self._sets.pop(str(name), None)

    def all(self) -> Dict[str, FilterSet]:
        return self._sets

    def __contains__(self, name: object) -> bool:
        return str(name) in self._sets

    def names(self) -> Iterable[str]:
        return list(self._sets)

# selectorkit/core/query.py
from __future__ import annotations

"""Selector queries
------------------
Ties a selector, a locator and an options bag together: builds the query
expression, evaluates it through a backend, applies the selector's filters
to every returned node, and explains failures in plain words.
"""

import re
from typing import Any, List, Mapping, Optional, Union

from selectorkit.backends.base import Backend, Node
from selectorkit.selectors.builtin import get_registry
from selectorkit.selectors.errors import Ambiguous, ElementNotFound, InvalidOptionValue, InvalidQueryOption
from selectorkit.selectors.filter import MISSING
from selectorkit.selectors.selector import CSS, Selector, SelectorRegistry
from selectorkit.utils.config import MatchStrategy, Settings, get_settings
from selectorkit.utils.logger import get_logger, log_with_context
from selectorkit.utils.timing import measure

__all__ = ["SelectorQuery", "VALID_KEYS"]

# Options understood by every query, on top of the selector's own filters
VALID_KEYS = ("text", "exact", "match")


class SelectorQuery:
    def __init__(
        self,
        selector: Union[str, Selector, None],
        locator: Any = None,
        options: Optional[Mapping[str, Any]] = None,
        *,
        registry: Optional[SelectorRegistry] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.registry = registry if registry is not None else get_registry()
        self.settings = settings if settings is not None else get_settings()
        self.defaults = self.settings.query_defaults()
        self.locator = locator
        self.options = dict(options or {})

        if isinstance(selector, Selector):
            self.selector = selector
        elif selector is None:
            self.selector = self.registry.detect(locator) or self.registry.get(self.settings.DEFAULT_SELECTOR)
        else:
            self.selector = self.registry.get(selector)

        self.log = log_with_context(get_logger(__name__), selector=self.selector.name, locator=self.locator)
        self._assert_valid_keys()
        self.match = self._match_strategy()
        self.expression = self.selector.call(self.locator, self.options)

    # ---------- Options ----------

    def _assert_valid_keys(self) -> None:
        valid = set(VALID_KEYS) | set(self.selector.custom_filters) | set(self.selector.expression_filters)
        invalid = set(self.options) - valid
        if invalid:
            raise InvalidQueryOption(self.selector.name, invalid, valid)

    def _match_strategy(self) -> MatchStrategy:
        raw = self.options.get("match", self.defaults["match"])
        try:
            return MatchStrategy(raw)
        except ValueError:
            raise InvalidOptionValue("match", raw, [m.value for m in MatchStrategy]) from None

    @property
    def exact(self) -> bool:
        return bool(self.options.get("exact", self.defaults["exact"]))

    # ---------- Rendering ----------

    def xpath(self, exact: Optional[bool] = None) -> str:
        exact = self.exact if exact is None else exact
        if hasattr(self.expression, "to_xpath"):
            return self.expression.to_xpath(exact=exact)
        return str(self.expression)

    def css(self) -> str:
        return str(self.expression)

    @property
    def description(self) -> str:
        desc = self.selector.label or self.selector.name
        if self.locator is not None:
            desc += f' "{self.locator}"'
        text = self.options.get("text")
        if text is not None:
            shown = text.pattern if isinstance(text, re.Pattern) else text
            desc += f' with text "{shown}"'
        extra = self.selector.description(self.options)
        if extra:
            desc += f" {extra}"
        return desc

    # ---------- Matching ----------

    def _matches_text(self, node: Node) -> bool:
        text = self.options.get("text")
        if text is None:
            return True
        actual = node.text()
        if isinstance(text, re.Pattern):
            return bool(text.search(actual))
        wanted = " ".join(str(text).split())
        return actual == wanted if self.settings.EXACT_TEXT else wanted in actual

    def matches_filters(self, node: Node) -> bool:
        if not self._matches_text(node):
            return False
        for name, f in self.selector.custom_filters.items():
            value = self.options[name] if name in self.options else MISSING
            if not f.apply(node, value, self.options):
                return False
        return True

    @measure(lambda q, *a, **k: f"resolve {q.selector.name}")
    def resolve_for(self, backend: Backend, scope: Optional[Node] = None, *, exact: Optional[bool] = None) -> List[Node]:
        """All nodes matching the expression and every filter, in document order."""
        if self.expression is None:
            return []
        if self.selector.format == CSS:
            query = self.css()
            nodes = backend.find_css(query, scope)
        else:
            query = self.xpath(exact)
            nodes = backend.find_xpath(query, scope)
        result = [n for n in nodes if self.matches_filters(n)]
        self.log.debug(f"{query} -> {len(nodes)} candidate(s), {len(result)} after filters")
        return result

    def find(self, backend: Backend, scope: Optional[Node] = None) -> Node:
        """
        Exactly one node, following the match strategy:
          - one: the exact option as given; more than one match is ambiguous
          - first: the exact option as given; first match wins
          - smart: exact matches first, then partial unless exact was requested;
            more than one match is ambiguous
          - prefer_exact: like smart, but the first match wins
        """
        if self.match in (MatchStrategy.smart, MatchStrategy.prefer_exact):
            result = self.resolve_for(backend, scope, exact=True)
            if not result and not self.exact:
                result = self.resolve_for(backend, scope, exact=False)
        else:
            result = self.resolve_for(backend, scope)

        if self.match in (MatchStrategy.one, MatchStrategy.smart) and len(result) > 1:
            raise Ambiguous(f"Ambiguous match, found {len(result)} elements matching {self.description}")
        if not result:
            raise ElementNotFound(f"Unable to find {self.description}")
        return result[0]

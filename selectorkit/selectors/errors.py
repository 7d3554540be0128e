# selectorkit/selectors/errors.py
from __future__ import annotations

from typing import Any, Iterable, Optional


class SelectorError(Exception):
    pass


class InvalidOptionValue(SelectorError, ValueError):
    def __init__(self, filter_name: str, value: Any, valid_values: Iterable[Any]) -> None:
        self.filter_name = filter_name
        self.value = value
        self.valid_values = list(valid_values)
        allowed = ", ".join(repr(v) for v in self.valid_values)
        super().__init__(f"Invalid value {value!r} passed to filter {filter_name!r} - expected one of: {allowed}")


class NoExpressionGenerator(SelectorError):
    def __init__(self, selector_name: str) -> None:
        self.selector_name = selector_name
        super().__init__(f"Selector {selector_name!r} has no xpath or css expression")


class UnknownSelector(SelectorError, KeyError):
    def __init__(self, name: str, known: Optional[Iterable[str]] = None) -> None:
        self.name = name
        known_s = ", ".join(sorted(known or [])) or "<empty>"
        super().__init__(f"Unknown selector {name!r}. Known: {known_s}")

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownFilterSet(SelectorError, KeyError):
    def __init__(self, name: str, known: Optional[Iterable[str]] = None) -> None:
        self.name = name
        known_s = ", ".join(sorted(known or [])) or "<empty>"
        super().__init__(f"Unknown filter set {name!r}. Known: {known_s}")

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidQueryOption(SelectorError, ValueError):
    def __init__(self, selector_name: str, keys: Iterable[str], valid: Iterable[str]) -> None:
        self.selector_name = selector_name
        self.keys = sorted(keys)
        self.valid = sorted(valid)
        super().__init__(
            f"Invalid option(s) {', '.join(self.keys)} for selector {selector_name!r}; "
            f"expected one of: {', '.join(self.valid)}"
        )


class ElementNotFound(SelectorError):
    pass


class Ambiguous(ElementNotFound):
    pass

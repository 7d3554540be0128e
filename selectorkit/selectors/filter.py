# selectorkit/selectors/filter.py
from __future__ import annotations

"""Post-query filters
--------------------
A Filter narrows the nodes returned by a selector's expression, driven by one
option value. Validation (valid values, boolean typing) happens at apply time.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Tuple

from selectorkit.selectors.errors import InvalidOptionValue

BOOLEAN = "boolean"
KNOWN_TYPES = frozenset({BOOLEAN})

Matcher = Callable[[Any, Any, Mapping[str, Any]], Any]


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class Filter:
    name: str
    matcher: Matcher = field(compare=False)
    valid_values: Optional[Tuple[Any, ...]] = None
    default: Any = MISSING
    skip_if: Any = MISSING
    boolean: bool = False

    @classmethod
    def build(cls, name: str, matcher: Matcher, *types: str, **options: Any) -> "Filter":
        """
        Create a filter from positional type tags and keyword options.

        `filter.build("disabled", fn, "boolean", default=False, skip_if="all")`
        """
        opts = dict(options)
        for t in types:
            if t not in KNOWN_TYPES:
                raise ValueError(f"Unknown filter type {t!r} for filter {name!r}")
            opts[t] = True
        valid = opts.pop("valid_values", None)
        unknown = set(opts) - {"default", "skip_if", BOOLEAN}
        if unknown:
            raise TypeError(f"Unexpected filter option(s) for {name!r}: {', '.join(sorted(unknown))}")
        return cls(
            name=name,
            matcher=matcher,
            valid_values=tuple(valid) if valid is not None else None,
            default=opts.get("default", MISSING),
            skip_if=opts.get("skip_if", MISSING),
            boolean=bool(opts.get(BOOLEAN, False)),
        )

    def has_default(self) -> bool:
        return self.default is not MISSING

    def skip(self, value: Any) -> bool:
        return self.skip_if is not MISSING and value == self.skip_if

    def allowed_values(self) -> Optional[Tuple[Any, ...]]:
        if self.valid_values is not None:
            return self.valid_values
        if self.boolean:
            return (True, False)
        return None

    def is_valid(self, value: Any) -> bool:
        if self.valid_values is not None:
            return value in self.valid_values
        if self.boolean:
            return isinstance(value, bool)
        return True

    def apply(self, node: Any, value: Any = MISSING, options: Optional[Mapping[str, Any]] = None) -> bool:
        if value is MISSING:
            if not self.has_default():
                return True
            value = self.default
        if self.skip(value):
            return True
        if not self.is_valid(value):
            raise InvalidOptionValue(self.name, value, self.allowed_values() or ())
        return bool(self.matcher(node, value, options or {}))

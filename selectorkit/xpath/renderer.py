# selectorkit/xpath/renderer.py
from __future__ import annotations

"""XPath renderer
----------------
Serializes expression trees into XPath 1.0 strings. Optional conditions are
allowed everywhere a predicate is expected: a condition that renders to the
empty string leaves the wrapped path unconstrained instead of producing
`path[]`.
"""

from typing import Any, Callable, Dict

from selectorkit.xpath.expression import Expression, Union


class Renderer:
    def __init__(self, exact: bool = False) -> None:
        self.exact = exact
        self._handlers: Dict[str, Callable[..., str]] = {
            "this_node": self.this_node,
            "descendant": self.descendant,
            "child": self.child,
            "anywhere": self.anywhere,
            "attribute": self.attribute,
            "text": self.text,
            "string_function": self.string_function,
            "normalize_space": self.normalize_space,
            "where": self.where,
            "equality": self.equality,
            "is": self.is_,
            "contains": self.contains,
            "starts_with": self.starts_with,
            "one_of": self.one_of,
            "or": self.or_,
            "and": self.and_,
            "not": self.not_,
            "any_of": self.any_of,
            "all_of": self.all_of,
            "literal": self.literal,
        }

    def render(self, node: Any) -> str:
        if isinstance(node, Union):
            return " | ".join(self.render(e) for e in node.expressions)
        if isinstance(node, Expression):
            try:
                handler = self._handlers[node.kind]
            except KeyError:
                raise ValueError(f"Unknown XPath expression kind: {node.kind!r}") from None
            return handler(*node.args)
        return self.value(node)

    # ---------- Values ----------

    def value(self, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, (Expression, Union)):
            return self.render(v)
        if isinstance(v, bool):
            return "true()" if v else "false()"
        if isinstance(v, (int, float)):
            return str(v)
        return self.string_literal(str(v))

    @staticmethod
    def string_literal(s: str) -> str:
        if "'" not in s:
            return f"'{s}'"
        if '"' not in s:
            return f'"{s}"'
        parts = s.split("'")
        pieces = []
        for i, part in enumerate(parts):
            if i:
                pieces.append('"\'"')
            if part:
                pieces.append(f"'{part}'")
        return f"concat({', '.join(pieces)})"

    def _name(self, n: Any) -> str:
        return self.render(n) if isinstance(n, (Expression, Union)) else str(n)

    def _with_element_conditions(self, prefix: str, names: tuple) -> str:
        rendered = [self._name(n) for n in names]
        if len(rendered) == 1:
            return f"{prefix}{rendered[0]}"
        if len(rendered) > 1:
            return f"{prefix}*[{' | '.join(f'self::{n}' for n in rendered)}]"
        return f"{prefix}*"

    # ---------- Paths ----------

    def this_node(self) -> str:
        return "."

    def descendant(self, current: Expression, names: tuple) -> str:
        return self._with_element_conditions(f"{self.render(current)}//", names)

    def child(self, current: Expression, names: tuple) -> str:
        return self._with_element_conditions(f"{self.render(current)}/", names)

    def anywhere(self, names: tuple) -> str:
        return self._with_element_conditions("//", names)

    def attribute(self, current: Expression, name: str) -> str:
        return f"{self.render(current)}/@{name}"

    def text(self, current: Expression) -> str:
        return f"{self.render(current)}/text()"

    def string_function(self, current: Expression) -> str:
        return f"string({self.render(current)})"

    def normalize_space(self, current: Expression) -> str:
        return f"normalize-space({self.render(current)})"

    def where(self, on: Any, condition: Any) -> str:
        rendered_on = self.render(on)
        rendered_condition = self.value(condition)
        if rendered_condition:
            return f"{rendered_on}[{rendered_condition}]"
        return rendered_on

    # ---------- Operators ----------

    def _binary(self, op: str, left: Any, right: Any) -> str:
        return f"({self.value(left)} {op} {self.value(right)})"

    def equality(self, left: Any, right: Any) -> str:
        return self._binary("=", left, right)

    def is_(self, left: Any, right: Any) -> str:
        if self.exact:
            return self.equality(left, right)
        return self.contains(left, right)

    def contains(self, left: Any, right: Any) -> str:
        return f"contains({self.value(left)}, {self.value(right)})"

    def starts_with(self, left: Any, right: Any) -> str:
        return f"starts-with({self.value(left)}, {self.value(right)})"

    def one_of(self, current: Any, values: tuple) -> str:
        cur = self.value(current)
        return "(" + " or ".join(f"{cur} = {self.value(v)}" for v in values) + ")"

    def or_(self, left: Any, right: Any) -> str:
        return self._join_conditions("or", (left, right))

    def and_(self, left: Any, right: Any) -> str:
        return self._join_conditions("and", (left, right))

    def not_(self, current: Any) -> str:
        return f"not({self.value(current)})"

    def any_of(self, conditions: tuple) -> str:
        return self._join_conditions("or", conditions)

    def all_of(self, conditions: tuple) -> str:
        return self._join_conditions("and", conditions)

    def _join_conditions(self, op: str, conditions: tuple) -> str:
        rendered = [r for r in (self.value(c) for c in conditions) if r]
        if not rendered:
            return ""
        if len(rendered) == 1:
            return rendered[0]
        return "(" + f" {op} ".join(rendered) + ")"

    def literal(self, raw: str) -> str:
        return raw

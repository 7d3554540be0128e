# selectorkit/xpath/expression.py
from __future__ import annotations

"""XPath expression tree
-----------------------
Immutable, structurally comparable nodes for composing XPath 1.0 queries.
Expressions are rendered lazily by `selectorkit.xpath.renderer.Renderer`, so
the same tree can be serialized with exact or partial `is_` matching.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Union as TUnion


@dataclass(frozen=True)
class Expression:
    kind: str
    args: tuple = ()

    # ---------- Navigation ----------

    def descendant(self, *names: Any) -> "Query":
        return self._step("descendant", names)

    def child(self, *names: Any) -> "Query":
        return self._step("child", names)

    def _step(self, kind: str, names: tuple) -> "Query":
        # a union step stays under this node: one path per member
        for i, n in enumerate(names):
            if isinstance(n, Union):
                return Union(tuple(
                    m for member in n.expressions
                    for m in _members(self._step(kind, names[:i] + (member,) + names[i + 1:]))
                ))
        return Expression(kind, (self, _freeze(names)))

    def attr(self, name: str) -> "Expression":
        return Expression("attribute", (self, name))

    def text(self) -> "Expression":
        return Expression("text", (self,))

    def string(self) -> "Expression":
        return Expression("string_function", (self,))

    def normalize_space(self) -> "Expression":
        return Expression("normalize_space", (self,))

    n = normalize_space

    # ---------- Conditions ----------

    def where(self, condition: Any) -> "Expression":
        return Expression("where", (self, _freeze(condition)))

    def equals(self, value: Any) -> "Expression":
        return Expression("equality", (self, _freeze(value)))

    def is_(self, value: Any) -> "Expression":
        """Equality when rendered exact, containment otherwise."""
        return Expression("is", (self, _freeze(value)))

    def contains(self, value: Any) -> "Expression":
        return Expression("contains", (self, _freeze(value)))

    def starts_with(self, value: Any) -> "Expression":
        return Expression("starts_with", (self, _freeze(value)))

    def one_of(self, *values: Any) -> "Expression":
        return Expression("one_of", (self, _freeze(values)))

    def or_(self, other: Any) -> "Expression":
        return Expression("or", (self, _freeze(other)))

    def and_(self, other: Any) -> "Expression":
        return Expression("and", (self, _freeze(other)))

    def not_(self) -> "Expression":
        return Expression("not", (self,))

    def union(self, *others: "Expression") -> "Union":
        members: tuple = (self,)
        for o in others:
            members += _members(o)
        return Union(members)

    __getitem__ = where
    __or__ = or_
    __and__ = and_
    __invert__ = not_
    __add__ = union

    # ---------- Rendering ----------

    def to_xpath(self, exact: bool = False) -> str:
        from selectorkit.xpath.renderer import Renderer

        return Renderer(exact=exact).render(self)

    def __str__(self) -> str:
        return self.to_xpath()


@dataclass(frozen=True)
class Union:
    """A set of alternative paths; refinements apply to every member."""
    expressions: tuple

    def where(self, condition: Any) -> "Union":
        return Union(tuple(e.where(condition) for e in self.expressions))

    def descendant(self, *names: Any) -> "Union":
        return Union(tuple(m for e in self.expressions for m in _members(e.descendant(*names))))

    def child(self, *names: Any) -> "Union":
        return Union(tuple(m for e in self.expressions for m in _members(e.child(*names))))

    def union(self, *others: "Expression") -> "Union":
        members = self.expressions
        for o in others:
            members += _members(o)
        return Union(members)

    __getitem__ = where
    __add__ = union

    def to_xpath(self, exact: bool = False) -> str:
        from selectorkit.xpath.renderer import Renderer

        return Renderer(exact=exact).render(self)

    def __str__(self) -> str:
        return self.to_xpath()


Query = TUnion[Expression, Union]


def _members(expr: Query) -> tuple:
    return expr.expressions if isinstance(expr, Union) else (expr,)


def _freeze(value: Any) -> Any:
    # lists -> tuples so expressions stay hashable and comparable
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


# ---------- DSL entry points ----------

_CURRENT = Expression("this_node")


def current() -> Expression:
    return _CURRENT


def descendant(*names: Any) -> Query:
    return _CURRENT.descendant(*names)


def child(*names: Any) -> Query:
    return _CURRENT.child(*names)


def anywhere(*names: Any) -> Expression:
    return Expression("anywhere", (_freeze(names),))


def attr(name: str) -> Expression:
    return _CURRENT.attr(name)


def text() -> Expression:
    return _CURRENT.text()


def string() -> Expression:
    return _CURRENT.string()


def literal(raw: str) -> Expression:
    """Raw XPath, inserted verbatim."""
    return Expression("literal", (raw,))


def any_of(*conditions: Any) -> Expression:
    """Disjunction of the non-empty conditions; renders empty when there are none."""
    return Expression("any_of", (_freeze(conditions),))


def all_of(*conditions: Any) -> Expression:
    """Conjunction of the non-empty conditions; renders empty when there are none."""
    return Expression("all_of", (_freeze(conditions),))


def union(*expressions: Iterable[Query]) -> Union:
    members: tuple = ()
    for e in expressions:
        members += _members(e)
    return Union(members)

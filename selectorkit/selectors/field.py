# selectorkit/selectors/field.py
from __future__ import annotations

"""Form field locating
---------------------
Builds the XPath used by the field-like selectors: match by id, name,
placeholder, associated <label for=...>, a wrapping <label>, and optionally
aria-label; then narrow by the id/name/placeholder/class options.
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from selectorkit import xpath as x
from selectorkit.xpath import Expression, Query, Renderer
from selectorkit.utils.config import get_settings

# Narrowing order is fixed
LOCATE_FIELD_ATTRIBUTES = ("id", "name", "placeholder", "class")


def _equals(attribute: str) -> Callable[[Any], Optional[Expression]]:
    def build(value: Any) -> Optional[Expression]:
        return x.attr(attribute).equals(str(value)) if value else None
    return build


def class_condition(classes: Any) -> Optional[Expression]:
    """Every requested class must appear as a whole token in @class."""
    if not classes:
        return None
    if isinstance(classes, str):
        classes = [classes]
    elif not isinstance(classes, (list, tuple)):
        classes = sorted(classes)
    clauses = [
        x.literal(f"contains(concat(' ', normalize-space(@class), ' '), {Renderer.string_literal(f' {k} ')})")
        for k in classes
    ]
    return x.all_of(*clauses)


ATTRIBUTE_CONDITIONS: Dict[str, Callable[[Any], Optional[Expression]]] = {
    "id": _equals("id"),
    "name": _equals("name"),
    "placeholder": _equals("placeholder"),
    "class": class_condition,
}


def attribute_condition(attribute: str, value: Any) -> Optional[Expression]:
    return ATTRIBUTE_CONDITIONS.get(attribute, _equals(attribute))(value)


def locate_field(
    base: Expression,
    locator: Any,
    options: Optional[Mapping[str, Any]] = None,
    *,
    enable_aria_label: Optional[bool] = None,
    attributes: Iterable[str] = LOCATE_FIELD_ATTRIBUTES,
) -> Query:
    options = options or {}
    if enable_aria_label is None:
        enable_aria_label = get_settings().ENABLE_ARIA_LABEL

    located: Query = base
    if locator is not None:
        locator = str(locator)
        label_text = x.string().n().is_(locator)
        matchers = [
            x.attr("id").equals(locator),
            x.attr("name").equals(locator),
            x.attr("placeholder").equals(locator),
            x.attr("id").equals(x.anywhere("label")[label_text].attr("for")),
        ]
        if enable_aria_label:
            matchers.append(x.attr("aria-label").is_(locator))

        # field inside its own <label>
        located = base[x.any_of(*matchers)] + x.descendant("label")[label_text].descendant(base)

    for attribute in attributes:
        located = located[attribute_condition(attribute, options.get(attribute))]
    return located

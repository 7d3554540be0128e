# selectorkit/selectors/builtin.py
from __future__ import annotations

"""Built-in selectors
--------------------
The standard selector catalogue (field, link, button, ...) and the shared
`_field` filter set, registered into an explicit SelectorRegistry.
"""

import functools
import re
from typing import Any, Mapping

from selectorkit import xpath as x
from selectorkit.selectors.field import locate_field
from selectorkit.selectors.filter import BOOLEAN
from selectorkit.selectors.filter_set import FilterSet
from selectorkit.selectors.selector import SelectorBuilder, SelectorRegistry

_ID_LOCATOR = re.compile(r"^#[A-Za-z][\w:.-]*$")


def _describe_field_states(options: Mapping[str, Any]) -> str:
    states = []
    if options.get("checked") or options.get("unchecked") is False:
        states.append("checked")
    if options.get("unchecked") or options.get("checked") is False:
        states.append("not checked")
    if options.get("disabled") is True:
        states.append("disabled")
    parts = []
    if states:
        parts.append(f"that is {' and '.join(states)}")
    if options.get("multiple") is True:
        parts.append("with the multiple attribute")
    elif options.get("multiple") is False:
        parts.append("without the multiple attribute")
    return " ".join(parts)


def _field_filters(fs: FilterSet) -> None:
    @fs.filter("checked", BOOLEAN)
    def _checked(node, value, options):
        return value == node.checked()

    @fs.filter("unchecked", BOOLEAN)
    def _unchecked(node, value, options):
        return value != node.checked()

    @fs.filter("disabled", BOOLEAN, default=False, skip_if="all")
    def _disabled(node, value, options):
        return value == node.disabled()

    @fs.filter("multiple", BOOLEAN)
    def _multiple(node, value, options):
        return value == (node.attribute("multiple") is not None)

    fs.describe(_describe_field_states)


def _with_value(node, value, options):
    return node.value() == str(value)


def register_builtins(registry: SelectorRegistry) -> SelectorRegistry:
    registry.filter_sets.add("_field", _field_filters)

    @registry.add("xpath")
    def _xpath(s: SelectorBuilder) -> None:
        s.match(lambda locator: isinstance(locator, str) and locator.startswith(("/", "./", "(")))

        @s.xpath()
        def _expr(locator, options):
            return x.literal(str(locator))

    @registry.add("css")
    def _css(s: SelectorBuilder) -> None:
        @s.css()
        def _expr(locator, options):
            return "*" if locator is None else str(locator)

    @registry.add("id")
    def _id(s: SelectorBuilder) -> None:
        s.match(lambda locator: isinstance(locator, str) and bool(_ID_LOCATOR.match(locator)))

        @s.xpath()
        def _expr(locator, options):
            return x.descendant()[x.attr("id").equals(str(locator).lstrip("#"))]

    @registry.add("field")
    def _field(s: SelectorBuilder) -> None:
        s.set_label("field")

        @s.xpath("id", "name", "placeholder", "type", "class")
        def _expr(locator, options):
            base = x.descendant("input", "textarea", "select")[~x.attr("type").one_of("submit", "image", "hidden")]
            if options.get("type"):
                ftype = str(options["type"])
                if ftype in ("textarea", "select"):
                    base = x.descendant(ftype)
                else:
                    base = base[x.attr("type").equals(ftype)]
            return locate_field(base, locator, options)

        s.filter_set("_field")

        @s.filter("readonly", BOOLEAN)
        def _readonly(node, value, options):
            return value == node.readonly()

        s.filter("with")(_with_value)

        @s.describe
        def _describe(options):
            parts = [f"with {ef} {options[ef]}" for ef in ("id", "name", "placeholder", "class") if options.get(ef)]
            if options.get("type"):
                parts.append(f'of type "{options["type"]}"')
            if "with" in options:
                parts.append(f'with value "{options["with"]}"')
            return " ".join(parts)

    @registry.add("fieldset")
    def _fieldset(s: SelectorBuilder) -> None:
        s.set_label("fieldset")

        @s.xpath()
        def _expr(locator, options):
            base = x.descendant("fieldset")
            if locator is None:
                return base
            locator = str(locator)
            return base[x.attr("id").equals(locator) | x.child("legend")[x.string().n().is_(locator)]]

    @registry.add("link")
    def _link(s: SelectorBuilder) -> None:
        s.set_label("link")

        @s.xpath("href")
        def _expr(locator, options):
            base = x.descendant("a")[x.attr("href")]
            if locator is not None:
                locator = str(locator)
                base = base[x.any_of(
                    x.attr("id").equals(locator),
                    x.string().n().is_(locator),
                    x.attr("title").is_(locator),
                    x.descendant("img")[x.attr("alt").is_(locator)],
                )]
            if options.get("href"):
                base = base[x.attr("href").equals(str(options["href"]))]
            return base

        @s.describe
        def _describe(options):
            return f'with href "{options["href"]}"' if options.get("href") else ""

    @registry.add("button")
    def _button(s: SelectorBuilder) -> None:
        s.set_label("button")

        @s.xpath()
        def _expr(locator, options):
            input_btn = x.descendant("input")[x.attr("type").one_of("submit", "reset", "image", "button")]
            btn = x.descendant("button")
            image_btn = x.descendant("input")[x.attr("type").equals("image")]
            if locator is not None:
                locator = str(locator)
                locator_matches = x.any_of(
                    x.attr("id").equals(locator),
                    x.attr("value").is_(locator),
                    x.attr("title").is_(locator),
                )
                input_btn = input_btn[locator_matches]
                btn = btn[x.any_of(
                    locator_matches,
                    x.string().n().is_(locator),
                    x.descendant("img")[x.attr("alt").is_(locator)],
                )]
                image_btn = image_btn[x.attr("alt").is_(locator)]
            return input_btn + btn + image_btn

        @s.filter("disabled", BOOLEAN, default=False, skip_if="all")
        def _disabled(node, value, options):
            return value == node.disabled()

        @s.describe
        def _describe(options):
            return "that is disabled" if options.get("disabled") is True else ""

    @registry.add("link_or_button")
    def _link_or_button(s: SelectorBuilder) -> None:
        s.set_label("link or button")

        @s.xpath()
        def _expr(locator, options):
            parts = [registry.get(name).call(locator, options) for name in ("link", "button")]
            return parts[0] + parts[1]

        @s.filter("disabled", BOOLEAN, default=False, skip_if="all")
        def _disabled(node, value, options):
            return node.tag_name == "a" or value == node.disabled()

        @s.describe
        def _describe(options):
            return "that is disabled" if options.get("disabled") is True else ""

    @registry.add("fillable_field")
    def _fillable_field(s: SelectorBuilder) -> None:
        s.set_label("field")

        @s.xpath("id", "name", "placeholder", "class")
        def _expr(locator, options):
            base = x.descendant("input", "textarea")[
                ~x.attr("type").one_of("submit", "image", "radio", "checkbox", "hidden", "file")
            ]
            return locate_field(base, locator, options)

        s.filter_set("_field", ["disabled", "multiple"])
        s.filter("with")(_with_value)

    @registry.add("radio_button")
    def _radio_button(s: SelectorBuilder) -> None:
        s.set_label("radio button")

        @s.xpath("id", "name", "class")
        def _expr(locator, options):
            return locate_field(x.descendant("input")[x.attr("type").equals("radio")], locator, options)

        s.filter_set("_field", ["checked", "unchecked", "disabled"])

        @s.filter("option")
        def _option(node, value, options):
            return node.value() == str(value)

    @registry.add("checkbox")
    def _checkbox(s: SelectorBuilder) -> None:
        s.set_label("checkbox")

        @s.xpath("id", "name", "class")
        def _expr(locator, options):
            return locate_field(x.descendant("input")[x.attr("type").equals("checkbox")], locator, options)

        s.filter_set("_field", ["checked", "unchecked", "disabled"])

        @s.filter("option")
        def _option(node, value, options):
            return node.value() == str(value)

    @registry.add("select")
    def _select(s: SelectorBuilder) -> None:
        s.set_label("select box")

        @s.xpath("id", "name", "placeholder", "class")
        def _expr(locator, options):
            return locate_field(x.descendant("select"), locator, options)

        s.filter_set("_field", ["disabled", "multiple"])

        @s.filter("options")
        def _options(node, value, options):
            actual = [o.text() for o in node.find_all(".//option")]
            return sorted(str(v) for v in value) == sorted(actual)

        @s.filter("with_options")
        def _with_options(node, value, options):
            actual = {o.text() for o in node.find_all(".//option")}
            return all(str(v) in actual for v in value)

        @s.filter("selected")
        def _selected(node, value, options):
            actual = [o.text() for o in node.find_all(".//option") if o.selected()]
            wanted = [value] if isinstance(value, str) else list(value)
            return sorted(str(v) for v in wanted) == sorted(actual)

        @s.describe
        def _describe(options):
            parts = []
            if options.get("options"):
                parts.append(f"with options {list(options['options'])!r}")
            if options.get("selected"):
                parts.append(f"with {options['selected']!r} selected")
            if options.get("with_options"):
                parts.append(f"with at least options {list(options['with_options'])!r}")
            return " ".join(parts)

    @registry.add("option")
    def _option(s: SelectorBuilder) -> None:
        s.set_label("option")

        @s.xpath()
        def _expr(locator, options):
            base = x.descendant("option")
            if locator is not None:
                base = base[x.string().n().is_(str(locator))]
            return base

        @s.filter("disabled", BOOLEAN)
        def _disabled(node, value, options):
            return value == node.disabled()

        @s.filter("selected", BOOLEAN)
        def _selected(node, value, options):
            return value == node.selected()

    @registry.add("file_field")
    def _file_field(s: SelectorBuilder) -> None:
        s.set_label("file field")

        @s.xpath("id", "name", "class")
        def _expr(locator, options):
            return locate_field(x.descendant("input")[x.attr("type").equals("file")], locator, options)

        s.filter_set("_field", ["disabled", "multiple"])

    @registry.add("table")
    def _table(s: SelectorBuilder) -> None:
        s.set_label("table")

        @s.xpath()
        def _expr(locator, options):
            base = x.descendant("table")
            if locator is None:
                return base
            locator = str(locator)
            return base[x.attr("id").equals(locator) | x.descendant("caption")[x.string().n().is_(locator)]]

    return registry


def build_registry() -> SelectorRegistry:
    """A fresh registry holding the built-in selectors."""
    return register_builtins(SelectorRegistry())


@functools.lru_cache(maxsize=1)
def get_registry() -> SelectorRegistry:
    """
    Process-wide registry, built once.
    Call `get_registry.cache_clear()` to start over (e.g. between tests).
    """
    return build_registry()

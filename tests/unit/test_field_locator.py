from selectorkit import xpath as x
from selectorkit.backends.lxml_backend import LxmlBackend
from selectorkit.selectors.field import attribute_condition, class_condition, locate_field

BASE = (
    ".//*[self::input | self::textarea | self::select]"
    "[not((./@type = 'submit' or ./@type = 'image' or ./@type = 'hidden'))]"
)
LABEL_DOG = "(normalize-space(string(.)) = 'Dog')"
DOG_MATCHERS = (
    "((./@id = 'Dog') or (./@name = 'Dog') or (./@placeholder = 'Dog') "
    f"or (./@id = //label[{LABEL_DOG}]/@for))"
)


def _class_clause(name):
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


def test_field_locator_matches_attributes_and_labels(registry):
    query = registry.get("field").call("Dog", {})
    rendered = query.to_xpath(exact=True)
    assert rendered == f"{BASE}[{DOG_MATCHERS}] | .//label[{LABEL_DOG}]//{BASE}"


def test_field_locator_partial_label_match_when_not_exact(registry):
    rendered = registry.get("field").call("Dog", {}).to_xpath(exact=False)
    assert "contains(normalize-space(string(.)), 'Dog')" in rendered
    assert "(./@id = 'Dog')" in rendered


def test_field_without_locator_is_only_narrowed_by_class(registry):
    rendered = registry.get("field").call(None, {"class": "foo"}).to_xpath()
    assert rendered == f"{BASE}[{_class_clause('foo')}]"
    assert "label" not in rendered


def test_field_with_several_classes_requires_all(registry):
    rendered = registry.get("field").call("X", {"class": ["a", "b"]}).to_xpath(exact=True)
    both = f"[({_class_clause('a')} and {_class_clause('b')})]"
    # the class condition narrows both the attribute path and the label-wrapping path
    assert rendered.count(both) == 2


def test_attribute_filters_apply_in_fixed_order():
    base = x.descendant("input")
    rendered = locate_field(
        base, None, {"class": "c", "placeholder": "p", "name": "n", "id": "i"}, enable_aria_label=False
    ).to_xpath()
    assert rendered == (
        ".//input[(./@id = 'i')][(./@name = 'n')][(./@placeholder = 'p')]"
        f"[{_class_clause('c')}]"
    )


def test_empty_attribute_options_are_ignored():
    base = x.descendant("input")
    rendered = locate_field(base, None, {"id": "", "name": None, "class": []}, enable_aria_label=False).to_xpath()
    assert rendered == ".//input"


def test_aria_label_is_added_when_enabled():
    base = x.descendant("input")
    without = locate_field(base, "Phone", {}, enable_aria_label=False).to_xpath(exact=True)
    with_aria = locate_field(base, "Phone", {}, enable_aria_label=True).to_xpath(exact=True)
    assert "aria-label" not in without
    assert "(./@aria-label = 'Phone')" in with_aria


def test_aria_label_follows_settings(monkeypatch, registry):
    monkeypatch.setenv("ENABLE_ARIA_LABEL", "true")
    from selectorkit.utils.config import get_settings

    get_settings.cache_clear()
    assert "aria-label" in registry.get("field").call("Phone", {}).to_xpath()


def test_locator_is_coerced_to_string():
    rendered = locate_field(x.descendant("input"), 42, {}, enable_aria_label=False).to_xpath(exact=True)
    assert "(./@id = '42')" in rendered


def test_condition_dispatch_table():
    assert attribute_condition("id", "a").to_xpath() == "(./@id = 'a')"
    assert attribute_condition("id", None) is None
    assert attribute_condition("data-test", "z").to_xpath() == "(./@data-test = 'z')"
    assert class_condition("solo").to_xpath() == _class_clause("solo")
    assert class_condition(None) is None


def test_call_is_referentially_transparent(registry):
    field = registry.get("field")
    assert field.call("Dog", {"class": "x"}) == field.call("Dog", {"class": "x"})
    assert field.call("Dog", {}).to_xpath() == field.call("Dog", {}).to_xpath()


def test_union_base_keeps_every_member_under_the_label():
    base = x.descendant("input") + x.descendant("textarea")
    rendered = locate_field(base, "Dog", {}, enable_aria_label=False).to_xpath(exact=True)
    assert f".//label[{LABEL_DOG}]//.//input" in rendered
    assert f".//label[{LABEL_DOG}]//.//textarea" in rendered

    doc = LxmlBackend.from_string(
        "<html><body><label>Dog <input id='a'></label><textarea id='stray'></textarea></body></html>"
    )
    assert [n["id"] for n in doc.find_xpath(rendered)] == ["a"]


def test_class_sets_render_in_stable_order():
    assert class_condition({"b", "a", "c"}) == class_condition(["a", "b", "c"])
    assert class_condition(frozenset({"z", "y"})).to_xpath() == (
        f"({_class_clause('y')} and {_class_clause('z')})"
    )

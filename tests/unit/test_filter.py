import pytest

from selectorkit.selectors.errors import InvalidOptionValue
from selectorkit.selectors.filter import BOOLEAN, MISSING, Filter


class FakeNode:
    def __init__(self, **attrs):
        self.attrs = attrs

    def attribute(self, name):
        return self.attrs.get(name)


def _exploding(node, value, options):
    raise AssertionError("matcher must not run")


def test_missing_value_without_default_is_satisfied():
    f = Filter.build("color", _exploding)
    assert f.apply(FakeNode(), MISSING, {}) is True


def test_missing_value_uses_default():
    seen = []

    def matcher(node, value, options):
        seen.append(value)
        return value == "red"

    f = Filter.build("color", matcher, default="red")
    assert f.apply(FakeNode()) is True
    assert seen == ["red"]


def test_skip_if_value_makes_filter_inert():
    f = Filter.build("disabled", _exploding, BOOLEAN, default=False, skip_if="all")
    assert f.apply(FakeNode(), "all", {}) is True


def test_skip_if_applies_to_default_too():
    f = Filter.build("disabled", _exploding, default="all", skip_if="all")
    assert f.apply(FakeNode()) is True


def test_boolean_filter_rejects_non_boolean():
    f = Filter.build("checked", lambda n, v, o: True, BOOLEAN)
    with pytest.raises(InvalidOptionValue) as exc:
        f.apply(FakeNode(), "not-a-boolean", {})
    assert exc.value.filter_name == "checked"
    assert exc.value.valid_values == [True, False]
    assert "checked" in str(exc.value)


def test_boolean_filter_rejects_truthy_integers():
    f = Filter.build("checked", lambda n, v, o: True, BOOLEAN)
    with pytest.raises(InvalidOptionValue):
        f.apply(FakeNode(), 1, {})


def test_valid_values_enforced():
    f = Filter.build("size", lambda n, v, o: n.attribute("size") == v, valid_values=["s", "m", "l"])
    assert f.apply(FakeNode(size="m"), "m", {}) is True
    assert f.apply(FakeNode(size="m"), "s", {}) is False
    with pytest.raises(InvalidOptionValue) as exc:
        f.apply(FakeNode(size="m"), "xl", {})
    assert exc.value.valid_values == ["s", "m", "l"]


def test_matcher_receives_all_options():
    received = {}

    def matcher(node, value, options):
        received.update(options)
        return True

    f = Filter.build("x", matcher)
    f.apply(FakeNode(), 1, {"x": 1, "y": 2})
    assert received == {"x": 1, "y": 2}


def test_matcher_result_is_coerced_to_bool():
    f = Filter.build("title", lambda n, v, o: n.attribute("title"))
    assert f.apply(FakeNode(title="hi"), "anything", {}) is True
    assert f.apply(FakeNode(), "anything", {}) is False


def test_unknown_type_tag_rejected():
    with pytest.raises(ValueError):
        Filter.build("x", lambda n, v, o: True, "integer")


def test_unknown_option_rejected():
    with pytest.raises(TypeError):
        Filter.build("x", lambda n, v, o: True, defualt=1)

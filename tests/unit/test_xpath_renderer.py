from selectorkit import xpath as x
from selectorkit.backends.lxml_backend import LxmlBackend
from selectorkit.xpath import Renderer


def test_where_with_empty_condition_renders_base_only():
    base = x.descendant("input")
    assert base[x.any_of()].to_xpath() == ".//input"
    assert base[None].to_xpath() == ".//input"
    assert base[x.all_of(None, x.any_of())].to_xpath() == ".//input"
    assert "[]" not in base[x.literal("")].to_xpath()


def test_where_with_condition():
    expr = x.descendant("input")[x.attr("id").equals("name")]
    assert expr.to_xpath() == ".//input[(./@id = 'name')]"


def test_multiple_element_names_use_self_axis():
    assert x.descendant("input", "textarea").to_xpath() == ".//*[self::input | self::textarea]"
    assert x.descendant().to_xpath() == ".//*"
    assert x.anywhere("label").to_xpath() == "//label"
    assert x.child("legend").to_xpath() == "./legend"


def test_is_renders_equality_when_exact_and_contains_otherwise():
    expr = x.descendant("label")[x.string().n().is_("Dog")]
    assert expr.to_xpath(exact=True) == ".//label[(normalize-space(string(.)) = 'Dog')]"
    assert expr.to_xpath(exact=False) == ".//label[contains(normalize-space(string(.)), 'Dog')]"


def test_one_of_and_not():
    expr = ~x.attr("type").one_of("submit", "hidden")
    assert expr.to_xpath() == "not((./@type = 'submit' or ./@type = 'hidden'))"


def test_or_and_any_of_flatten_empty_parts():
    cond = x.any_of(x.attr("id").equals("a"), None, x.attr("name").equals("a"))
    assert cond.to_xpath() == "((./@id = 'a') or (./@name = 'a'))"
    assert x.any_of(x.attr("id").equals("a")).to_xpath() == "(./@id = 'a')"
    assert (x.attr("id").equals("a") | x.attr("name").equals("b")).to_xpath() == "((./@id = 'a') or (./@name = 'b'))"
    assert (x.attr("id").equals("a") & x.attr("name").equals("b")).to_xpath() == "((./@id = 'a') and (./@name = 'b'))"


def test_union_distributes_conditions():
    union = x.descendant("input") + x.descendant("textarea")
    narrowed = union[x.attr("name").equals("n")]
    assert narrowed.to_xpath() == ".//input[(./@name = 'n')] | .//textarea[(./@name = 'n')]"
    assert union[None].to_xpath() == ".//input | .//textarea"


def test_string_literal_quoting():
    assert Renderer.string_literal("plain") == "'plain'"
    assert Renderer.string_literal("it's") == '"it\'s"'
    assert Renderer.string_literal('it\'s "quoted"') == """concat('it', "'", 's "quoted"')"""


def test_descendant_of_expression_nests_path():
    inner = x.descendant("input")
    expr = x.descendant("label")[x.string().n().is_("Dog")].descendant(inner)
    assert expr.to_xpath(exact=True) == ".//label[(normalize-space(string(.)) = 'Dog')]//.//input"


def test_expressions_compare_structurally():
    a = x.descendant("input")[x.attr("id").equals("a")]
    b = x.descendant("input")[x.attr("id").equals("a")]
    assert a == b
    assert hash(a) == hash(b)
    assert str(a) == a.to_xpath()


def test_union_step_stays_under_parent():
    expr = x.descendant("label").descendant(x.descendant("a") + x.descendant("b"))
    assert expr.to_xpath() == ".//label//.//a | .//label//.//b"
    assert x.child("p").child(x.child("a") + x.child("b")).to_xpath() == "./p/./a | ./p/./b"


def test_union_step_evaluates_inside_parent_only():
    doc = LxmlBackend.from_string("<html><body><label>Dog<a id='in'></a></label><b id='out'></b></body></html>")
    expr = x.descendant("label").descendant(x.descendant("a") + x.descendant("b"))
    assert [n["id"] for n in doc.find_xpath(expr.to_xpath())] == ["in"]

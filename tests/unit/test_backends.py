from unittest.mock import MagicMock

from playwright.sync_api import Locator, Page

from selectorkit.backends import LxmlBackend, evaluate
from selectorkit.backends.playwright_backend import PlaywrightBackend, PlaywrightNode


def test_lxml_xpath_results_skip_non_elements(backend):
    assert backend.find_xpath("//a/@href") == []
    assert [n["href"] for n in backend.find_xpath("//a[@href]")] == ["/foo", "/bar"]


def test_lxml_css_and_evaluate_dispatch(backend):
    assert [n.tag_name for n in evaluate(backend, "table#scores", format="css")] == ["table"]
    assert [n.tag_name for n in evaluate(backend, ".//table", format="xpath")] == ["table"]


def test_lxml_node_state():
    b = LxmlBackend.from_string(
        "<html><body>"
        "<input id='a' readonly value=' x '>"
        "<input id='c' type='checkbox'><input id='r' type='radio' value='yes'>"
        "<select id='s' multiple><option selected value='1'>One</option><option selected>Two</option></select>"
        "<select id='t' disabled><option>Only</option></select>"
        "</body></html>"
    )
    (a,) = b.find_xpath("//input[@id='a']")
    assert a.readonly() is True
    assert a.value() == " x "
    (c,) = b.find_xpath("//input[@id='c']")
    assert c.value() == "on"
    (r,) = b.find_xpath("//input[@id='r']")
    assert r.value() == "yes"
    (s,) = b.find_xpath("//select[@id='s']")
    assert s.value() == ["1", "Two"]
    (t,) = b.find_xpath("//select[@id='t']")
    assert t.value() == "Only"
    (opt,) = b.find_xpath("//select[@id='t']/option")
    assert opt.disabled() is True


def test_playwright_backend_queries_page():
    page = MagicMock(spec=Page)
    handle = MagicMock()
    page.query_selector_all.return_value = [handle]
    backend = PlaywrightBackend(page)

    nodes = backend.find_xpath(".//input")
    page.query_selector_all.assert_called_once_with("xpath=.//input")
    assert len(nodes) == 1 and nodes[0].handle is handle

    backend.find_css("input.big")
    page.query_selector_all.assert_called_with("css=input.big")


def test_playwright_backend_queries_locator_and_scope():
    root = MagicMock(spec=Locator)
    h = MagicMock()
    root.locator.return_value.element_handles.return_value = [h]
    backend = PlaywrightBackend(root)
    assert backend.find_css("a")[0].handle is h
    root.locator.assert_called_once_with("css=a")

    scope_handle = MagicMock()
    scope_handle.query_selector_all.return_value = []
    assert backend.find_xpath(".//a", PlaywrightNode(scope_handle)) == []
    scope_handle.query_selector_all.assert_called_once_with("xpath=.//a")


def test_playwright_node_accessors():
    handle = MagicMock()
    handle.get_attribute.return_value = "form[name]"
    handle.text_content.return_value = "  Hello \n world "
    handle.is_disabled.return_value = True
    handle.evaluate.return_value = True
    node = PlaywrightNode(handle)

    assert node.attribute("name") == "form[name]"
    assert node["name"] == "form[name]"
    assert node.text() == "Hello world"
    assert node.disabled() is True
    assert node.checked() is True
    handle.get_attribute.assert_called_with("name")

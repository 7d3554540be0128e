# selectorkit/backends/lxml_backend.py
from __future__ import annotations

"""Static HTML backend
---------------------
Evaluates queries against an lxml-parsed document. Useful for fixtures,
offline checks and the `find` CLI command.
"""

from pathlib import Path
from typing import Any, List, Optional

from lxml import etree
from lxml import html as lxml_html

from selectorkit.backends.base import normalize_text

_FORM_CONTROLS = frozenset({"button", "input", "select", "textarea", "optgroup", "option", "fieldset"})


class LxmlNode:
    def __init__(self, element: lxml_html.HtmlElement) -> None:
        self.element = element

    def __repr__(self) -> str:
        return f"<LxmlNode {self.tag_name} {dict(self.element.attrib)!r}>"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LxmlNode) and other.element is self.element

    def __hash__(self) -> int:
        return id(self.element)

    @property
    def tag_name(self) -> str:
        return str(self.element.tag).lower()

    def attribute(self, name: str) -> Optional[str]:
        return self.element.get(name)

    def __getitem__(self, name: str) -> Optional[str]:
        return self.attribute(name)

    def text(self) -> str:
        return normalize_text(self.element.text_content())

    def value(self) -> Any:
        tag = self.tag_name
        if tag == "textarea":
            return self.element.text_content()
        if tag == "select":
            selected = [o for o in self.find_all(".//option") if o.selected()]
            values = [o.value() for o in selected]
            if self.attribute("multiple") is not None:
                return values
            if values:
                return values[0]
            first = self.find_all(".//option")
            return first[0].value() if first else None
        if tag == "option":
            v = self.attribute("value")
            return v if v is not None else self.text()
        value = self.attribute("value")
        if value is None and tag == "input" and (self.attribute("type") or "").lower() in ("checkbox", "radio"):
            return "on"
        return value or ""

    def checked(self) -> bool:
        return self.attribute("checked") is not None

    def selected(self) -> bool:
        return self.attribute("selected") is not None

    def readonly(self) -> bool:
        return self.attribute("readonly") is not None

    def disabled(self) -> bool:
        el = self.element
        if self.tag_name in _FORM_CONTROLS and el.get("disabled") is not None:
            return True
        if self.tag_name == "option":
            for anc in el.iterancestors("select", "optgroup"):
                if anc.get("disabled") is not None:
                    return True
        # disabled fieldsets disable everything but the contents of their first legend
        for fieldset in el.iterancestors("fieldset"):
            if fieldset.get("disabled") is None:
                continue
            legends = fieldset.findall("legend")
            first_legend = legends[0] if legends else None
            if first_legend is None or not any(a is first_legend for a in el.iterancestors()):
                return True
        return False

    def find_all(self, xpath: str) -> List["LxmlNode"]:
        return _wrap(self.element.xpath(xpath))


class LxmlBackend:
    def __init__(self, document: lxml_html.HtmlElement) -> None:
        self.document = document

    @classmethod
    def from_string(cls, markup: str) -> "LxmlBackend":
        return cls(lxml_html.document_fromstring(markup))

    @classmethod
    def from_file(cls, path: Path | str) -> "LxmlBackend":
        return cls.from_string(Path(path).read_text(encoding="utf-8"))

    @property
    def root(self) -> LxmlNode:
        return LxmlNode(self.document)

    def _scope(self, scope: Optional[LxmlNode]) -> lxml_html.HtmlElement:
        return scope.element if scope is not None else self.document

    def find_xpath(self, query: str, scope: Optional[LxmlNode] = None) -> List[LxmlNode]:
        return _wrap(self._scope(scope).xpath(query))

    def find_css(self, query: str, scope: Optional[LxmlNode] = None) -> List[LxmlNode]:
        return _wrap(self._scope(scope).cssselect(query))


def _wrap(results: Any) -> List[LxmlNode]:
    # attribute/text results are strings; only elements are nodes
    if not isinstance(results, list):
        return []
    return [LxmlNode(e) for e in results if isinstance(e, etree._Element)]

# selectorkit/backends/playwright_backend.py
from __future__ import annotations

"""Playwright backend
--------------------
Evaluates rendered queries in a live page through Playwright's `xpath=` and
`css=` selector engines and exposes the matched ElementHandles as nodes.
"""

from typing import Any, List, Optional, Union

from playwright.sync_api import ElementHandle, Locator, Page

from selectorkit.backends.base import normalize_text
from selectorkit.utils.logger import get_logger

log = get_logger(__name__)


class PlaywrightNode:
    def __init__(self, handle: ElementHandle) -> None:
        self.handle = handle

    def __repr__(self) -> str:
        return f"<PlaywrightNode {self.handle!r}>"

    @property
    def tag_name(self) -> str:
        return str(self.handle.evaluate("e => e.tagName.toLowerCase()"))

    def attribute(self, name: str) -> Optional[str]:
        return self.handle.get_attribute(name)

    def __getitem__(self, name: str) -> Optional[str]:
        return self.attribute(name)

    def text(self) -> str:
        return normalize_text(self.handle.text_content())

    def value(self) -> Any:
        return self.handle.evaluate(
            "e => (e.tagName === 'SELECT' && e.multiple)"
            " ? Array.from(e.selectedOptions).map(o => o.value) : e.value"
        )

    def checked(self) -> bool:
        return bool(self.handle.evaluate("e => !!e.checked"))

    def selected(self) -> bool:
        return bool(self.handle.evaluate("e => !!e.selected"))

    def disabled(self) -> bool:
        # Playwright applies the fieldset/legend rules for us
        return self.handle.is_disabled()

    def readonly(self) -> bool:
        return bool(self.handle.evaluate("e => !!e.readOnly"))

    def find_all(self, xpath: str) -> List["PlaywrightNode"]:
        return [PlaywrightNode(h) for h in self.handle.query_selector_all(f"xpath={xpath}")]


class PlaywrightBackend:
    def __init__(self, root: Union[Page, Locator]) -> None:
        self.root = root

    def _query_all(self, selector: str, scope: Optional[PlaywrightNode]) -> List[PlaywrightNode]:
        if scope is not None:
            handles = scope.handle.query_selector_all(selector)
        elif isinstance(self.root, Locator):
            handles = self.root.locator(selector).element_handles()
        else:
            handles = self.root.query_selector_all(selector)
        log.debug(f"{selector} -> {len(handles)} handle(s)")
        return [PlaywrightNode(h) for h in handles]

    def find_xpath(self, query: str, scope: Optional[PlaywrightNode] = None) -> List[PlaywrightNode]:
        return self._query_all(f"xpath={query}", scope)

    def find_css(self, query: str, scope: Optional[PlaywrightNode] = None) -> List[PlaywrightNode]:
        return self._query_all(f"css={query}", scope)

# selectorkit/backends/base.py
from __future__ import annotations

from typing import Any, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class Node(Protocol):
    """What filters may ask of a matched element."""

    @property
    def tag_name(self) -> str: ...

    def attribute(self, name: str) -> Optional[str]: ...

    def text(self) -> str: ...

    def value(self) -> Any: ...

    def checked(self) -> bool: ...

    def selected(self) -> bool: ...

    def disabled(self) -> bool: ...

    def readonly(self) -> bool: ...

    def find_all(self, xpath: str) -> List["Node"]: ...


class Backend(Protocol):
    """Evaluates rendered queries against a document, in document order."""

    def find_xpath(self, query: str, scope: Optional[Node] = None) -> List[Node]: ...

    def find_css(self, query: str, scope: Optional[Node] = None) -> List[Node]: ...


def evaluate(backend: Backend, query: str, scope: Optional[Node] = None, *, format: str = "xpath") -> List[Node]:
    if format == "css":
        return backend.find_css(query, scope)
    if format == "xpath":
        return backend.find_xpath(query, scope)
    raise ValueError(f"Unknown query format: {format!r}")


def normalize_text(s: Optional[str]) -> str:
    return " ".join((s or "").split())

"""
Backends package
----------------
Adapters that evaluate rendered queries and expose matched elements as nodes.
The Playwright adapter lives in `selectorkit.backends.playwright_backend` and
is not imported here.
"""

from .base import Backend, Node, evaluate
from .lxml_backend import LxmlBackend, LxmlNode

__all__ = [
    "Backend",
    "Node",
    "evaluate",
    "LxmlBackend",
    "LxmlNode",
]

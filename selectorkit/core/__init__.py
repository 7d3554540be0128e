"""
Core package for selectorkit.
Lightweight package init to avoid import cycles.

Consumers should import submodules directly, e.g.:
  from selectorkit.core.query import SelectorQuery
"""

__all__: list[str] = []

"""
selectorkit
-----------
Named, composable element selectors for browser automation: XPath/CSS
expression synthesis, post-query filters and a registry to hold them.
"""

__version__ = "0.1.0"

"""Common literal values used across sfdevops_pages.

These constants keep filenames, suffixes, and ordering sentinels centralized
so the loader, sidebar builder, renderer, and tests can import the same values
without drifting. Intended for internal use within the sfdevops_pages package.

Examples
--------
>>> from sfdevops_pages import _constants
>>> _constants.DEFAULT_ROUTE_BASE
'/docs'
>>> ".mdx" in _constants.DOCUMENT_SUFFIXES
True
"""

import sys

MAX_POSITION = sys.maxsize
DEFAULT_ROUTE_BASE = "/docs"
DOCUMENT_SUFFIXES = (".md", ".mdx")
INDEX_STEMS = frozenset({"index", "README"})
CATEGORY_FILENAMES = ("_category_.yml", "_category_.yaml", "_category_.json")
SITE_GRAPH_FILENAME = "site-graph.json"

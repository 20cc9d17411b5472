"""Reference static HTML rendering layer consuming a ``SiteGraph``."""

from .homepage import HomePageBuilder
from .link_rewriter import CrossLinkExtension, relative_href
from .pages import DocPageBuilder
from .renderer import HtmlContentRenderer, prepare_source
from .site import SiteRenderer

__all__ = [
    "CrossLinkExtension",
    "DocPageBuilder",
    "HomePageBuilder",
    "HtmlContentRenderer",
    "SiteRenderer",
    "prepare_source",
    "relative_href",
]

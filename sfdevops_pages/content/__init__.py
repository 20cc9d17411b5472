"""Read Markdown sources and their frontmatter into immutable documents."""

from .frontmatter import Frontmatter, FrontmatterResult, parse_frontmatter
from .loader import (
    CategoryMeta,
    LoadResult,
    derive_slug,
    first_heading,
    load_documents,
    parse_document,
)

__all__ = [
    "CategoryMeta",
    "Frontmatter",
    "FrontmatterResult",
    "LoadResult",
    "derive_slug",
    "first_heading",
    "load_documents",
    "parse_document",
    "parse_frontmatter",
]

"""
Search engine for the haeum knowledge base.

Loads a manifest of Markdown/text documents over HTTP, splits them into
titled sections, builds a TF-IDF index and ranks sections against queries.
"""

from haeum_kb.search.errors import (
    DocumentFetchError,
    IndexBuildError,
    KnowledgeBaseError,
    ManifestFetchError,
    ManifestFileError,
)
from haeum_kb.search.indexer import KnowledgeBase, build_index, compute_idf, index_document
from haeum_kb.search.models import Hit, Index, ManifestEntry, Section
from haeum_kb.search.ranking import search
from haeum_kb.search.tokenizer import tokenize

__all__ = [
    "DocumentFetchError",
    "Hit",
    "Index",
    "IndexBuildError",
    "KnowledgeBase",
    "KnowledgeBaseError",
    "ManifestEntry",
    "ManifestFetchError",
    "ManifestFileError",
    "Section",
    "build_index",
    "compute_idf",
    "index_document",
    "search",
    "tokenize",
]

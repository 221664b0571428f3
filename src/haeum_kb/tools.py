"""MCP tools for the haeum-kb server.

This module defines the tools exposed by the MCP server:
- search: Ranked keyword search over the knowledge base
- reindex: Rebuild the index from the manifest
"""

import logging

from fastmcp import FastMCP

from haeum_kb.search import Hit, IndexBuildError, KnowledgeBase
from haeum_kb.search.ranking import top_files

logger = logging.getLogger(__name__)

# Length of the fallback excerpt when a hit has no highlight sentences
EXCERPT_CHARS = 160

NO_CONTENT_NOTICE = "The knowledge base has no documents yet."


def excerpt(hit: Hit, max_chars: int = EXCERPT_CHARS) -> str:
    """Preview text for a hit: its highlights, or the start of the section."""
    if hit.highlights:
        return " ".join(hit.highlights)
    text = hit.section.text
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + "…"


def format_hit(hit: Hit) -> dict:
    """Render a hit for chat clients, citing its source file."""
    return {
        "title": hit.section.title,
        "file": hit.section.file,
        "score": round(hit.score, 4),
        "highlights": list(hit.highlights),
        "excerpt": excerpt(hit),
    }


async def search_knowledge_base(kb: KnowledgeBase, query: str, limit: int) -> dict:
    """Run a query, separating build failures from an empty knowledge base."""
    try:
        index = await kb.get_index()
    except IndexBuildError as e:
        logger.error("Search unavailable: %s", e)
        return {"ok": False, "results": [], "error": str(e)}

    if index.is_empty:
        return {"ok": True, "results": [], "sources": [], "notice": NO_CONTENT_NOTICE}

    hits = await kb.query(query, k=limit)
    return {
        "ok": True,
        "results": [format_hit(hit) for hit in hits],
        "sources": top_files(hits),
    }


async def reindex_knowledge_base(kb: KnowledgeBase) -> dict:
    """Rebuild the index; the previous index stays in use if this fails."""
    try:
        index = await kb.reindex()
    except IndexBuildError as e:
        logger.error("Reindex failed: %s", e)
        return {"ok": False, "error": str(e)}

    return {"ok": True, "sections": len(index.sections), "files": len(index.files)}


def register_tools(mcp: FastMCP, kb: KnowledgeBase, default_limit: int = 5) -> None:
    """Register the knowledge-base tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        kb: Knowledge base the tools query
        default_limit: Result count when the caller does not pass one
    """

    @mcp.tool()
    async def search(query: str, limit: int = default_limit) -> dict:
        """Search the haeum knowledge base (Korean or English keywords).

        Sections are ranked by TF-IDF, with a boost when the query appears in
        the section heading or the file name.

        Args:
            query: Free-text query
            limit: Maximum number of results to return

        Returns:
            Dictionary with:
            - ok: False if the index could not be built
            - results: List of {title, file, score, highlights, excerpt}
            - sources: Cited files in rank order
            - notice: Set when the knowledge base is empty
            - error: Set when ok is False
        """
        return await search_knowledge_base(kb, query, limit)

    @mcp.tool()
    async def reindex() -> dict:
        """Rebuild the search index from the manifest.

        Returns:
            Dictionary with ok, and the section and file counts or an error.
        """
        return await reindex_knowledge_base(kb)

"""MCP Resources for haeum-kb.

Resources expose the state of the knowledge base as read-only URIs.
"""

import json

from fastmcp import FastMCP

from haeum_kb.search import KnowledgeBase


def get_status_resource(kb: KnowledgeBase) -> str:
    """Resource: kb://status

    Returns whether an index is built, its size and the last build error.
    """
    return json.dumps(kb.status(), indent=2, ensure_ascii=False)


def get_manifest_resource(kb: KnowledgeBase) -> str:
    """Resource: kb://manifest

    Returns the manifest entries the current index was built from, with the
    number of sections each one contributed. Empty if nothing is built.
    """
    index = kb.index
    if index is None:
        return json.dumps({"built": False, "documents": []}, indent=2)

    section_counts: dict[str, int] = {}
    for section in index.sections:
        section_counts[section.url] = section_counts.get(section.url, 0) + 1

    documents = []
    for entry in index.manifest:
        data = entry.to_dict()
        data["sections"] = section_counts.get(entry.url, 0)
        documents.append(data)

    return json.dumps({"built": True, "documents": documents}, indent=2, ensure_ascii=False)


def register_resources(mcp: FastMCP, kb: KnowledgeBase) -> None:
    """Register all resources with the FastMCP server."""

    @mcp.resource("kb://status")
    def status_resource() -> str:
        """Knowledge base index status."""
        return get_status_resource(kb)

    @mcp.resource("kb://manifest")
    def manifest_resource() -> str:
        """Documents in the current index."""
        return get_manifest_resource(kb)

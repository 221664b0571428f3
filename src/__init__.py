"""
haeum-kb - knowledge base search for the Haeum Korean school website.

Indexes the Markdown/text documents listed in the site's KB manifest and
answers keyword queries for the DocBot chat widget and MCP clients.

Stack:
- Python + FastMCP (official SDK)
- httpx (manifest and document fetching)
- TF-IDF over Hangul/Latin tokens (in-memory index)
- Markdown (source of truth)
"""

__version__ = "0.1.0"

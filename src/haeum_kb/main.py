"""Main entry point for the haeum-kb MCP server and command line."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from fastmcp import FastMCP

from haeum_kb.config import Config, get_config
from haeum_kb.resources import register_resources
from haeum_kb.search import KnowledgeBase, KnowledgeBaseError
from haeum_kb.search.manifest import merge_manifest, read_manifest, write_manifest
from haeum_kb.search.walker import clean_text_file, generate_manifest
from haeum_kb.tools import excerpt, register_tools

logger = logging.getLogger(__name__)


def create_knowledge_base(config: Config) -> KnowledgeBase:
    """Create a knowledge base from configuration."""
    return KnowledgeBase(
        manifest_url=config.manifest_url,
        base_url=config.base_url,
        retries=config.fetch_retries,
        build_timeout=config.build_timeout,
    )


def create_server(config: Config, kb: KnowledgeBase | None = None) -> FastMCP:
    """Create and configure the MCP server with all components.

    Args:
        config: Configuration instance with all settings.
        kb: Knowledge base to serve; built from config if omitted.
    """
    mcp = FastMCP(
        name="haeumKB",
        instructions=(
            "haeumKB answers questions about the Haeum Korean language school "
            "(classes, schedules, fees, blog posts). Use the search tool with "
            "Korean or English keywords and cite the returned file names."
        ),
    )

    if kb is None:
        kb = create_knowledge_base(config)
    logger.info("Knowledge base manifest: %s (base %s)", kb.manifest_url, kb.base_url)

    logger.info("Registering resources...")
    register_resources(mcp, kb)

    logger.info("Registering tools...")
    register_tools(mcp, kb, default_limit=config.search_limit)

    logger.info("Server configured successfully")
    return mcp


def run_search(config: Config, query: str, k: int) -> int:
    """Build the index once and print ranked results."""
    kb = create_knowledge_base(config)
    try:
        hits = asyncio.run(kb.query(query, k=k))
    except KnowledgeBaseError as e:
        logger.error("Search failed: %s", e)
        return 1

    if kb.index is not None and kb.index.is_empty:
        print("No content available.")
        return 0
    if not hits:
        print("No results.")
        return 0

    for rank, hit in enumerate(hits, start=1):
        print(f"{rank}. {hit.section.title} [{hit.section.file}] ({hit.score:.3f})")
        print(f"   {excerpt(hit)}")
    return 0


def run_manifest(kb_root: Path, prefix: str, output: Path) -> int:
    """Regenerate manifest entries from kb_root and merge them into output."""
    try:
        existing = read_manifest(output)
    except KnowledgeBaseError as e:
        logger.error("%s", e)
        return 1

    discovered = generate_manifest(kb_root, url_prefix=prefix)
    merged = merge_manifest(existing, discovered)
    write_manifest(output, merged)
    logger.info("Manifest has %d entries (%d discovered)", len(merged), len(discovered))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="haeum-kb - knowledge base search server")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("serve", help="Run the MCP server (default)")

    search_parser = subparsers.add_parser("search", help="Query the knowledge base once")
    search_parser.add_argument("query", help="Free-text query")
    search_parser.add_argument("-k", type=int, default=None, help="Maximum results")

    manifest_parser = subparsers.add_parser(
        "manifest", help="Generate the manifest from a local KB directory"
    )
    manifest_parser.add_argument("--root", type=Path, default=None, help="KB directory")
    manifest_parser.add_argument("--prefix", default="/kb", help="URL prefix for entries")
    manifest_parser.add_argument(
        "--output", type=Path, default=None, help="Manifest file (default: <root>/manifest.json)"
    )

    clean_parser = subparsers.add_parser("clean", help="Remove blog noise from a text dump")
    clean_parser.add_argument("source", type=Path)
    clean_parser.add_argument("destination", type=Path)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main function - dispatches the selected command."""
    # Configure logging here to avoid side effects on import
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args = build_parser().parse_args(argv)
    config = get_config()

    if args.command == "search":
        k = args.k if args.k is not None else config.search_limit
        sys.exit(run_search(config, args.query, k))

    if args.command == "manifest":
        kb_root = args.root or config.kb_root
        output = args.output or kb_root / "manifest.json"
        sys.exit(run_manifest(kb_root, args.prefix, output))

    if args.command == "clean":
        try:
            clean_text_file(args.source, args.destination)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Clean failed: %s", e)
            sys.exit(1)
        sys.exit(0)

    logger.info("=" * 50)
    logger.info("haeumKB starting...")
    logger.info("  KB_BASE_URL:     %s", config.base_url)
    logger.info("  KB_MANIFEST_URL: %s", config.manifest_url)
    logger.info("  KB_PORT:         %s", config.port)
    logger.info("  KB_BUILD_TIMEOUT: %s", config.build_timeout or "none")
    logger.info("=" * 50)

    try:
        mcp = create_server(config)
        logger.info("Starting MCP server on port %s...", config.port)
        mcp.run(transport="sse", host="0.0.0.0", port=config.port)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except Exception:
        logger.exception("Server error")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Discovery of knowledge-base files in a local directory."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from haeum_kb.search.models import ManifestEntry
from haeum_kb.search.parser import parse_frontmatter
from haeum_kb.search.text import preclean_raw_text

logger = logging.getLogger(__name__)

KB_EXTENSIONS = {".md", ".txt"}


@dataclass
class FileInfo:
    """Information about a discovered file."""

    path: Path  # Absolute path
    relative_path: str  # Relative to the KB root, "/"-separated
    extension: str  # md or txt


def walk_kb_root(kb_root: Path) -> Iterator[FileInfo]:
    """
    Walk the KB directory and yield FileInfo for each .md/.txt file.

    Hidden files and directories are skipped. Files are yielded in sorted
    path order so generated manifests are reproducible.
    """
    if not kb_root.exists():
        return

    for file_path in sorted(kb_root.rglob("*")):
        if not file_path.is_file() or file_path.suffix.lower() not in KB_EXTENSIONS:
            continue

        relative_parts = file_path.relative_to(kb_root).parts
        if any(part.startswith(".") for part in relative_parts):
            continue

        yield FileInfo(
            path=file_path,
            relative_path="/".join(relative_parts),
            extension=file_path.suffix.lower().lstrip("."),
        )


def generate_manifest(kb_root: Path, url_prefix: str = "/kb") -> list[ManifestEntry]:
    """
    Build manifest entries for every document under kb_root.

    Title, date, source and external URL come from front matter when the
    file has it.
    """
    prefix = url_prefix.rstrip("/")
    entries: list[ManifestEntry] = []

    for file_info in walk_kb_root(kb_root):
        try:
            content = file_info.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning(
                "Skipping file with invalid UTF-8 encoding: %s (%s)",
                file_info.relative_path,
                e,
            )
            continue

        frontmatter, _ = parse_frontmatter(content, file_info.relative_path)
        entries.append(
            ManifestEntry(
                url=f"{prefix}/{file_info.relative_path}",
                title=frontmatter.title,
                type=file_info.extension,
                date=frontmatter.date,
                source=frontmatter.source,
                external_url=frontmatter.external_url,
            )
        )

    logger.info("Discovered %d documents under %s", len(entries), kb_root)
    return entries


def clean_text_file(source: Path, destination: Path) -> None:
    """Write a noise-free copy of an imported text dump."""
    cleaned = preclean_raw_text(source.read_text(encoding="utf-8"))
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(cleaned, encoding="utf-8")
    logger.info("Cleaned %s -> %s", source, destination)

"""Manifest parsing, persistence and merging."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from haeum_kb.search.errors import ManifestFileError
from haeum_kb.search.models import ManifestEntry

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_URL = "/kb/manifest.json"

OPTIONAL_FIELDS = ("title", "type", "date", "source", "external_url")


def parse_manifest(data: Any) -> list[ManifestEntry]:
    """
    Convert decoded manifest JSON into entries.

    Raises:
        ValueError: If data is not an array of objects with a string "url".
    """
    if not isinstance(data, list):
        raise ValueError(f"Manifest must be a JSON array, got {type(data).__name__}")

    entries: list[ManifestEntry] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Manifest item {i} must be an object")
        url = item.get("url")
        if not isinstance(url, str) or not url:
            raise ValueError(f"Manifest item {i} has no valid 'url'")

        fields = {}
        for key in OPTIONAL_FIELDS:
            value = item.get(key)
            if value is not None:
                fields[key] = str(value)
        entries.append(ManifestEntry(url=url, **fields))

    return entries


def read_manifest(path: Path) -> list[ManifestEntry]:
    """Read a manifest file. A missing file is an empty manifest."""
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return parse_manifest(data)
    except (OSError, ValueError) as e:
        raise ManifestFileError(f"Cannot read manifest {path}: {e}") from e


def write_manifest(path: Path, entries: Iterable[ManifestEntry]) -> None:
    """Write entries as pretty-printed JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps([e.to_dict() for e in entries], ensure_ascii=False, indent=2)
    path.write_text(text + "\n", encoding="utf-8")
    logger.info("Manifest written: %s", path)


def merge_manifest(
    existing: Iterable[ManifestEntry],
    updates: Iterable[ManifestEntry],
) -> list[ManifestEntry]:
    """
    Merge updated entries into an existing manifest by URL.

    Fields set on an update override the previous entry; unset fields keep
    their previous value. The result is sorted newest first, then by title.
    """
    by_url: dict[str, ManifestEntry] = {}
    for entry in existing:
        by_url[entry.url] = entry

    for update in updates:
        previous = by_url.get(update.url)
        if previous is None:
            by_url[update.url] = update
            continue
        merged = {**previous.to_dict(), **update.to_dict()}
        by_url[update.url] = ManifestEntry(**merged)

    entries = list(by_url.values())
    # Two stable passes: title ascending, then date descending
    entries.sort(key=lambda e: e.title or "")
    entries.sort(key=lambda e: e.date or "0000-00-00", reverse=True)
    return entries

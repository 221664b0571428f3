"""Parser for the YAML front matter written by the content tooling."""

import logging
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)


@dataclass
class FrontmatterData:
    """Parsed front matter data."""

    title: str | None = None
    date: str | None = None
    source: str | None = None
    external_url: str | None = None
    raw: dict | None = None


def _as_str(value) -> str | None:
    # Dates come back from YAML as datetime.date
    if value is None:
        return None
    return str(value)


def parse_frontmatter(content: str, url: str = "") -> tuple[FrontmatterData, str]:
    """
    Parse YAML front matter from a document.

    Args:
        content: The full document text
        url: Source location, used for log messages only

    Returns:
        Tuple of (FrontmatterData, content_without_frontmatter). When there
        is no valid front matter the content is returned unchanged.
    """
    data = FrontmatterData()
    body = content

    if content.startswith("---"):
        parts = content.split("---", 2)
        if len(parts) >= 3:
            try:
                raw = yaml.safe_load(parts[1])
            except yaml.YAMLError as e:
                logger.debug("Invalid YAML front matter in %s: %s", url, e)
                return data, body

            if raw is None or isinstance(raw, dict):
                raw = raw or {}
                data.raw = raw
                data.title = _as_str(raw.get("title"))
                data.date = _as_str(raw.get("date"))
                data.source = _as_str(raw.get("source"))
                data.external_url = _as_str(raw.get("external_url"))
                body = parts[2].lstrip("\n")

    return data, body

"""Segmentation of cleaned documents into titled sections."""

import re
from dataclasses import dataclass

from haeum_kb.search.text import FENCED_CODE_PATTERN, strip_markdown

# Split point: a newline followed by a heading-marker line
SECTION_BOUNDARY_PATTERN = re.compile(r"\n(?=#+\s)")
HEADING_PATTERN = re.compile(r"^(#+)[ \t]+(.+)$", re.MULTILINE)
EXTENSION_PATTERN = re.compile(r"\.(md|txt)$", re.IGNORECASE)


@dataclass
class SectionPart:
    """A section before tokenization."""

    title: str
    body: str

    @property
    def full_text(self) -> str:
        return f"{self.title}\n{self.body}".strip()


def fallback_title(
    file: str,
    manifest_title: str | None = None,
    frontmatter_title: str | None = None,
) -> str:
    """Title for text that has no heading of its own."""
    title = manifest_title or frontmatter_title or file
    return EXTENSION_PATTERN.sub("", title)


def _split_outside_fences(text: str) -> list[str]:
    fences = [m.span() for m in FENCED_CODE_PATTERN.finditer(text)]

    parts: list[str] = []
    start = 0
    for boundary in SECTION_BOUNDARY_PATTERN.finditer(text):
        pos = boundary.start()
        if any(fence_start <= pos < fence_end for fence_start, fence_end in fences):
            continue
        parts.append(text[start:pos])
        start = boundary.end()
    parts.append(text[start:])
    return parts


def split_sections(cleaned: str, fallback: str) -> list[SectionPart]:
    """
    Split a precleaned document at its heading lines.

    Each heading starts a new part. A part without a heading (text before the
    first heading, or a document with no headings at all) gets the fallback
    title. Heading markers inside fenced code blocks do not split. Title and
    body are Markdown-stripped.
    """
    parts = [p for p in _split_outside_fences(cleaned) if p]
    if not parts:
        parts = [cleaned]

    sections: list[SectionPart] = []
    for part in parts:
        match = HEADING_PATTERN.match(part)
        if match:
            title = strip_markdown(match.group(2)) or fallback
            body = part[match.end():]
        else:
            title = fallback
            body = part
        sections.append(SectionPart(title=title, body=strip_markdown(body)))

    return sections

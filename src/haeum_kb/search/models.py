"""Data models for the search engine."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass
class ManifestEntry:
    """One source document listed in the manifest."""

    url: str
    title: str | None = None
    type: str | None = None  # md, txt
    date: str | None = None  # ISO date, written by the content tooling
    source: str | None = None  # e.g. "blog"
    external_url: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Serialize to the manifest JSON shape, omitting unset fields."""
        data = {"url": self.url}
        for key in ("title", "type", "date", "source", "external_url"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class Section:
    """A titled, contiguous unit of one document."""

    id: str  # "<file>#<title>"
    file: str
    title: str
    text: str
    sentences: tuple[str, ...] = ()
    tf: Mapping[str, int] = field(default_factory=dict)
    url: str = ""  # manifest URL of the source document


@dataclass(frozen=True)
class Index:
    """Built search index. Never mutated; a rebuild produces a new one."""

    sections: tuple[Section, ...] = ()
    idf: Mapping[str, float] = field(default_factory=dict)
    manifest: tuple[ManifestEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.sections

    @property
    def files(self) -> list[str]:
        """Distinct source files in section order."""
        return list(dict.fromkeys(s.file for s in self.sections))


@dataclass
class Hit:
    """A ranked search result."""

    section: Section
    score: float
    highlights: list[str] = field(default_factory=list)

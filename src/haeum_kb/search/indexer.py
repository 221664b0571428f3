"""Index construction and the cached knowledge base."""

import asyncio
import logging
import math
from collections import Counter
from collections.abc import Sequence

import httpx

from haeum_kb.search.chunker import fallback_title, split_sections
from haeum_kb.search.errors import DocumentFetchError, IndexBuildError
from haeum_kb.search.fetcher import fetch_document, fetch_manifest
from haeum_kb.search.manifest import DEFAULT_MANIFEST_URL
from haeum_kb.search.models import Hit, Index, ManifestEntry, Section
from haeum_kb.search.parser import parse_frontmatter
from haeum_kb.search.ranking import search
from haeum_kb.search.text import preclean_raw_text, split_sentences, unicode_normalize
from haeum_kb.search.tokenizer import term_frequencies, tokenize

logger = logging.getLogger(__name__)


def file_name(url: str) -> str:
    """Last path segment of a URL, or the URL itself if that is empty."""
    return url.split("/")[-1] or url


def index_document(entry: ManifestEntry, raw: str) -> list[Section]:
    """Clean, segment and tokenize one fetched document."""
    file = file_name(entry.url)
    text = preclean_raw_text(unicode_normalize(raw))
    frontmatter, body = parse_frontmatter(text, entry.url)
    fallback = fallback_title(file, entry.title, frontmatter.title)

    sections: list[Section] = []
    for part in split_sections(body, fallback):
        full_text = part.full_text
        sections.append(
            Section(
                id=f"{file}#{part.title}",
                file=file,
                title=part.title,
                text=full_text,
                sentences=tuple(split_sentences(full_text)),
                tf=dict(term_frequencies(tokenize(full_text))),
                url=entry.url,
            )
        )
    return sections


def compute_idf(sections: Sequence[Section]) -> dict[str, float]:
    """Smoothed inverse document frequency over sections."""
    df: Counter[str] = Counter()
    for section in sections:
        df.update(section.tf.keys())

    n = len(sections) or 1
    return {token: math.log((n + 1) / (d + 1)) + 1 for token, d in df.items()}


async def _load_document(
    client: httpx.AsyncClient,
    entry: ManifestEntry,
    retries: int,
) -> list[Section]:
    try:
        raw = await fetch_document(client, entry.url, retries=retries)
    except DocumentFetchError as e:
        logger.warning("Skipping document: %s", e)
        return []

    try:
        return index_document(entry, raw)
    except Exception:
        logger.exception("Skipping malformed document %s", entry.url)
        return []


async def build_index(
    manifest_url: str = DEFAULT_MANIFEST_URL,
    *,
    client: httpx.AsyncClient | None = None,
    base_url: str = "",
    retries: int = 0,
) -> Index:
    """
    Build a fresh index from a manifest.

    Documents are fetched concurrently but sections keep manifest order.
    Documents that fail to load are skipped; if all of them fail the result
    is an empty index.

    Args:
        manifest_url: Location of the manifest JSON
        client: HTTP client to use; one is created (and closed) if omitted
        base_url: Base for relative URLs when no client is given
        retries: Extra attempts per fetch

    Raises:
        ManifestFetchError: If the manifest cannot be fetched or parsed.
    """
    if client is None:
        async with httpx.AsyncClient(base_url=base_url, follow_redirects=True) as owned:
            return await build_index(manifest_url, client=owned, retries=retries)

    logger.info("Building index from %s", manifest_url)
    manifest = await fetch_manifest(client, manifest_url, retries=retries)

    per_document = await asyncio.gather(
        *(_load_document(client, entry, retries) for entry in manifest)
    )
    sections = tuple(s for doc_sections in per_document for s in doc_sections)
    idf = compute_idf(sections)

    loaded = sum(1 for doc_sections in per_document if doc_sections)
    logger.info(
        "Index built: %d sections from %d/%d documents, %d tokens",
        len(sections),
        loaded,
        len(manifest),
        len(idf),
    )
    return Index(sections=sections, idf=idf, manifest=tuple(manifest))


class KnowledgeBase:
    """
    Lazily built, cached index.

    The index is built on first use and kept until invalidate() or reindex().
    Builds are serialized; a failed rebuild keeps the previous index.
    """

    def __init__(
        self,
        manifest_url: str = DEFAULT_MANIFEST_URL,
        base_url: str = "",
        retries: int = 0,
        build_timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the knowledge base.

        Args:
            manifest_url: Location of the manifest JSON
            base_url: Base for relative manifest and document URLs
            retries: Extra attempts per fetch
            build_timeout: Seconds allowed for a whole build; None for no limit
            transport: Optional httpx transport (used by tests)
        """
        self.manifest_url = manifest_url
        self.base_url = base_url
        self.retries = retries
        self.build_timeout = build_timeout
        self._transport = transport
        self._index: Index | None = None
        self._last_error: str | None = None
        self._lock = asyncio.Lock()

    @property
    def index(self) -> Index | None:
        """The current index, or None if none has been built."""
        return self._index

    def invalidate(self) -> None:
        """Drop the cached index; the next query rebuilds it."""
        self._index = None

    async def get_index(self) -> Index:
        """Return the cached index, building it if needed."""
        if self._index is not None:
            return self._index
        async with self._lock:
            if self._index is None:
                self._index = await self._build()
            return self._index

    async def reindex(self) -> Index:
        """Rebuild the index and replace the cached one."""
        async with self._lock:
            self._index = await self._build()
            return self._index

    async def query(self, text: str, k: int = 5) -> list[Hit]:
        """Search the (lazily built) index."""
        return search(text, await self.get_index(), k)

    async def _build(self) -> Index:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                coro = build_index(self.manifest_url, client=client, retries=self.retries)
                if self.build_timeout:
                    index = await asyncio.wait_for(coro, timeout=self.build_timeout)
                else:
                    index = await coro
        except asyncio.TimeoutError as e:
            self._last_error = f"Index build timed out after {self.build_timeout}s"
            raise IndexBuildError(self._last_error) from e
        except IndexBuildError as e:
            self._last_error = str(e)
            raise

        self._last_error = None
        return index

    def status(self) -> dict:
        """Summary of the cached index for status reporting."""
        index = self._index
        return {
            "manifest_url": self.manifest_url,
            "built": index is not None,
            "sections": len(index.sections) if index else 0,
            "files": len(index.files) if index else 0,
            "tokens": len(index.idf) if index else 0,
            "last_error": self._last_error,
        }

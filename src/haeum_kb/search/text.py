"""Text normalization and cleaning for knowledge-base documents."""

import logging
import re
import unicodedata

logger = logging.getLogger(__name__)

# Zero-width space/joiners and BOM
ZERO_WIDTH_PATTERN = re.compile("[\u200b-\u200d\ufeff]")

# A line that is exactly the tag marker, plus the hashtag lines right after it
TAG_BLOCK_PATTERN = re.compile(r"^태그[ \t]*$(?:\n[ \t]*#[^\s#].*)*", re.MULTILINE)

# UI strings left over from imported Naver blog pages, matched as whole lines
NOISE_LINES = (
    "프로파일",
    "URL 복사",
    "통계",
    "본문 기타 기능",
    "태그수정",
    "Keep 보내기메모 보내기기타 보내기 펼치기",
    "Keep 보내기",
    "메모 보내기",
    "기타 보내기",
    "펼치기",
    "수정 삭제 설정",
    "외부",
    "네이버 지도",
    "naver.me",
)

NOISE_LINE_PATTERN = re.compile(
    r"^(?:" + "|".join(re.escape(line) for line in NOISE_LINES) + r")[ \t]*$",
    re.MULTILINE,
)

TRAILING_SPACE_PATTERN = re.compile(r"[ \t]+$", re.MULTILINE)
BLANK_RUN_PATTERN = re.compile(r"\n{3,}")

FENCED_CODE_PATTERN = re.compile(r"```[\s\S]*?```")
IMAGE_PATTERN = re.compile(r"!\[(.*?)\]\((.*?)\)")
LINK_PATTERN = re.compile(r"\[(.*?)\]\((.*?)\)")
EMPHASIS_PATTERN = re.compile(r"[*_~`]")
BLOCK_MARKER_PATTERN = re.compile(r"[>#-]")
WHITESPACE_PATTERN = re.compile(r"\s+")

SENTENCE_BOUNDARY_PATTERN = re.compile(r"(?<=[.!?])\s+|\n+")


def unicode_normalize(text: str) -> str:
    """Compose text to NFC, returning it unchanged if normalization fails."""
    try:
        return unicodedata.normalize("NFC", text)
    except (TypeError, ValueError) as e:
        logger.debug("Unicode normalization failed, keeping original: %s", e)
        return text


def preclean_raw_text(text: str) -> str:
    """
    Remove platform noise from a raw document before Markdown stripping.

    Drops zero-width characters, tag blocks and boilerplate UI lines, strips
    trailing whitespace and collapses runs of blank lines.
    """
    if not text:
        return text

    out = ZERO_WIDTH_PATTERN.sub("", text)
    out = out.replace("\r\n", "\n").replace("\r", "\n")
    out = TAG_BLOCK_PATTERN.sub("", out)
    out = NOISE_LINE_PATTERN.sub("", out)
    out = TRAILING_SPACE_PATTERN.sub("", out)
    out = BLANK_RUN_PATTERN.sub("\n\n", out)
    return out.strip() + "\n"


def strip_markdown(markdown: str) -> str:
    """Reduce Markdown to a single line of plain text."""
    out = FENCED_CODE_PATTERN.sub(lambda m: f"\n{m.group(0)}\n", markdown)
    # Images before links, otherwise the link pattern leaves a stray "!"
    out = IMAGE_PATTERN.sub(r"\1", out)
    out = LINK_PATTERN.sub(r"\1", out)
    out = EMPHASIS_PATTERN.sub("", out)
    out = BLOCK_MARKER_PATTERN.sub(" ", out)
    out = WHITESPACE_PATTERN.sub(" ", out)
    return out.strip()


def split_sentences(text: str) -> list[str]:
    """Split text after sentence-final punctuation or at line breaks."""
    parts = SENTENCE_BOUNDARY_PATTERN.split(text)
    return [part.strip() for part in parts if part and part.strip()]

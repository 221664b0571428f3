"""Tests for text normalization and cleaning."""

import unicodedata

import pytest

from haeum_kb.search.text import (
    preclean_raw_text,
    split_sentences,
    strip_markdown,
    unicode_normalize,
)


class TestUnicodeNormalize:
    def test_composes_decomposed_hangul(self):
        decomposed = unicodedata.normalize("NFD", "한국어")
        assert decomposed != "한국어"
        assert unicode_normalize(decomposed) == "한국어"

    def test_falls_back_to_original_on_failure(self):
        not_a_string = b"raw bytes"
        assert unicode_normalize(not_a_string) is not_a_string


class TestPrecleanRawText:
    def test_removes_zero_width_characters(self):
        assert preclean_raw_text("\ufeff안\u200b녕\u200d") == "안녕\n"

    def test_removes_noise_lines(self):
        raw = "본문입니다\nURL 복사\n통계\n네이버 지도\n끝"
        cleaned = preclean_raw_text(raw)
        assert "URL 복사" not in cleaned
        assert "통계" not in cleaned
        assert "네이버 지도" not in cleaned
        assert cleaned.startswith("본문입니다")
        assert cleaned.endswith("끝\n")

    def test_noise_must_match_whole_line(self):
        raw = "통계 자료를 공유합니다"
        assert preclean_raw_text(raw) == "통계 자료를 공유합니다\n"

    def test_removes_tag_block(self):
        raw = "본문\n\n태그\n#한국어\n#발음\n\n다음 문단"
        cleaned = preclean_raw_text(raw)
        assert "#한국어" not in cleaned
        assert "#발음" not in cleaned
        assert "태그" not in cleaned
        assert "다음 문단" in cleaned

    def test_tag_block_ends_at_first_non_hashtag_line(self):
        raw = "본문\n태그\n#a\n#b\n다음 문단 계속\n\n끝"
        assert preclean_raw_text(raw) == "본문\n\n다음 문단 계속\n\n끝\n"

    def test_heading_after_tag_marker_is_kept(self):
        assert preclean_raw_text("태그\n#한국어\n# 운영 시간\n본문") == "# 운영 시간\n본문\n"

    def test_collapses_blank_lines(self):
        assert preclean_raw_text("a\n\n\n\n\nb") == "a\n\nb\n"

    def test_strips_trailing_whitespace(self):
        assert preclean_raw_text("a   \nb\t\n") == "a\nb\n"

    def test_empty_input(self):
        assert preclean_raw_text("") == ""


class TestStripMarkdown:
    def test_links_keep_text(self):
        assert strip_markdown("see [our site](https://example.com)") == "see our site"

    def test_images_keep_alt(self):
        assert strip_markdown("![classroom photo](/a.jpg)") == "classroom photo"

    def test_removes_emphasis_and_backticks(self):
        assert strip_markdown("**bold** _it_ ~~del~~ `code`") == "bold it del code"

    def test_heading_quote_and_bullet_markers(self):
        assert strip_markdown("## Title\n> quote\n- item") == "Title quote item"

    def test_fenced_code_content_kept(self):
        assert strip_markdown("before\n```\nprint(1)\n```\nafter") == "before print(1) after"

    def test_collapses_whitespace(self):
        assert strip_markdown("  a \n\n b\t c  ") == "a b c"


class TestSplitSentences:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("One. Two! Three?", ["One.", "Two!", "Three?"]),
            ("제목\n본문입니다.", ["제목", "본문입니다."]),
            ("a\n\n\nb", ["a", "b"]),
            ("3.5 hours", ["3.5 hours"]),
            ("", []),
            ("  \n  ", []),
        ],
    )
    def test_split(self, text: str, expected: list[str]):
        assert split_sentences(text) == expected

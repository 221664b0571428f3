"""Tests for the tokenizer."""

import unicodedata

import pytest

from haeum_kb.search.tokenizer import STOPWORDS, term_frequencies, tokenize


class TestTokenize:
    def test_mixed_scripts(self):
        assert tokenize("Hello 안녕 World123") == ["hello", "안녕", "world123"]

    def test_english_stopwords_removed(self):
        assert tokenize("the cat and the dog") == ["cat", "dog"]

    def test_korean_particles_removed(self):
        assert tokenize("수업 그리고 상담 또는 문의") == ["수업", "상담", "문의"]

    def test_punctuation_separates_tokens(self):
        assert tokenize("1:1 수업, e-mail!") == ["1", "1", "수업", "e", "mail"]

    def test_hangul_and_digits_are_separate_runs(self):
        assert tokenize("9시부터") == ["9", "시부터"]

    def test_hangul_not_lowercased_latin_is(self):
        assert tokenize("TOPIK 한국어") == ["topik", "한국어"]

    def test_decomposed_input_is_composed(self):
        assert tokenize(unicodedata.normalize("NFD", "발음")) == ["발음"]

    @pytest.mark.parametrize("text", ["", "   ", "!!! ...", "the and of"])
    def test_no_tokens(self, text: str):
        assert tokenize(text) == []

    @pytest.mark.parametrize(
        "text",
        ["Hello 안녕 World123", "수업료는 얼마인가요?", "", "a.b.c 1:1"],
    )
    def test_is_pure(self, text: str):
        assert tokenize(text) == tokenize(text)

    def test_stopwords_never_emitted(self):
        text = " ".join(sorted(STOPWORDS)) + " 수업"
        assert tokenize(text) == ["수업"]


def test_term_frequencies():
    tf = term_frequencies(["online", "zoom", "online"])
    assert tf == {"online": 2, "zoom": 1}

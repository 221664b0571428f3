"""Tests for manifest parsing, persistence and merging."""

import json

import pytest

from haeum_kb.search import ManifestEntry, ManifestFileError
from haeum_kb.search.manifest import (
    merge_manifest,
    parse_manifest,
    read_manifest,
    write_manifest,
)


class TestParseManifest:
    def test_minimal_and_full_entries(self):
        entries = parse_manifest(
            [
                {"url": "/kb/a.md"},
                {
                    "url": "/kb/blog/b.md",
                    "title": "B",
                    "type": "md",
                    "date": "2025-01-02",
                    "source": "blog",
                    "external_url": "https://blog.naver.com/x",
                },
            ]
        )

        assert entries[0] == ManifestEntry(url="/kb/a.md")
        assert entries[1].title == "B"
        assert entries[1].source == "blog"

    def test_unknown_fields_ignored(self):
        entries = parse_manifest([{"url": "/kb/a.md", "weight": 3}])
        assert entries == [ManifestEntry(url="/kb/a.md")]

    def test_duplicates_kept(self):
        entries = parse_manifest([{"url": "/kb/a.md"}, {"url": "/kb/a.md"}])
        assert len(entries) == 2

    @pytest.mark.parametrize(
        "data",
        [None, {}, "[]", [1], [{"url": ""}], [{"title": "x"}], [{"url": ["/kb/a.md"]}]],
    )
    def test_invalid(self, data):
        with pytest.raises(ValueError):
            parse_manifest(data)


class TestReadWriteManifest:
    def test_missing_file_is_empty(self, tmp_path):
        assert read_manifest(tmp_path / "manifest.json") == []

    def test_round_trip(self, tmp_path):
        path = tmp_path / "kb" / "manifest.json"
        entries = [ManifestEntry(url="/kb/a.md", title="운영 시간"), ManifestEntry(url="/kb/b.txt")]

        write_manifest(path, entries)

        assert read_manifest(path) == entries
        text = path.read_text(encoding="utf-8")
        assert "운영 시간" in text
        assert text.endswith("]\n")
        assert json.loads(text)[1] == {"url": "/kb/b.txt"}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text("{broken", encoding="utf-8")
        with pytest.raises(ManifestFileError):
            read_manifest(path)

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text('{"url": "/kb/a.md"}', encoding="utf-8")
        with pytest.raises(ManifestFileError, match="JSON array"):
            read_manifest(path)


class TestMergeManifest:
    def test_update_overrides_and_keeps_unset_fields(self):
        existing = [ManifestEntry(url="/kb/a.md", title="Old", source="blog")]
        updates = [ManifestEntry(url="/kb/a.md", title="New")]

        merged = merge_manifest(existing, updates)

        assert merged == [ManifestEntry(url="/kb/a.md", title="New", source="blog")]

    def test_new_entries_appended(self):
        merged = merge_manifest(
            [ManifestEntry(url="/kb/a.md")], [ManifestEntry(url="/kb/b.md")]
        )
        assert {e.url for e in merged} == {"/kb/a.md", "/kb/b.md"}

    def test_sorted_by_date_desc_then_title(self):
        merged = merge_manifest(
            [],
            [
                ManifestEntry(url="/kb/1.md", title="b", date="2025-01-01"),
                ManifestEntry(url="/kb/2.md", title="z"),
                ManifestEntry(url="/kb/3.md", title="a", date="2025-01-01"),
                ManifestEntry(url="/kb/4.md", title="c", date="2025-06-30"),
                ManifestEntry(url="/kb/5.md", title="y"),
            ],
        )

        assert [e.url for e in merged] == ["/kb/4.md", "/kb/3.md", "/kb/1.md", "/kb/5.md", "/kb/2.md"]

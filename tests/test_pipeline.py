import json
import os
import stat
from datetime import date

import pytest

from conftest import directory_section, mapping_rows, pattern_block, write_pattern_file
from pattern_index.config import Settings
from pattern_index.errors import MissingDirectoryError
from pattern_index.pipeline import build_index


def _seed_two_files(source_dir):
    write_pattern_file(source_dir, "alpha", [pattern_block(1, "GenServer State Handling", "state leaks across requests")])
    write_pattern_file(source_dir, "beta", [pattern_block(1, "Retry with Backoff")])


def test_end_to_end_two_files(source_dir, settings):
    _seed_two_files(source_dir)

    result = build_index(settings, today=date(2026, 1, 2))

    assert len(result.mappings) == 2
    assert len(mapping_rows(result.content)) == 2
    directory = directory_section(result.content)
    assert "**alpha.md** (1 patterns)" in directory
    assert "**beta.md** (1 patterns)" in directory
    assert result.report.pattern_count == 2
    assert result.output_path.read_text(encoding="utf-8") == result.content


def test_json_index_is_written(source_dir, settings):
    _seed_two_files(source_dir)
    result = build_index(settings, today=date(2026, 1, 2))

    payload = json.loads(result.json_output_path.read_text(encoding="utf-8"))
    assert payload["generated"] == "2026-01-02"
    assert [f["file"] for f in payload["files"]] == ["alpha.md", "beta.md"]
    assert payload["mappings"][1]["keywords"] == ["retry", "backoff", "transient"]


def test_json_index_can_be_disabled(source_dir, tmp_path):
    _seed_two_files(source_dir)
    settings = Settings(repo_root=tmp_path, json_output_file=None)
    result = build_index(settings, today=date(2026, 1, 2))
    assert result.json_output_path is None
    assert not (tmp_path / "patterns" / "pattern_index.json").exists()


def test_empty_directory_still_writes_index(settings):
    result = build_index(settings, today=date(2026, 1, 2))

    assert result.mappings == []
    assert mapping_rows(result.content) == []
    assert directory_section(result.content).strip() == ""
    assert result.report.files_ok is False
    assert result.output_path.exists()


def test_missing_directory_aborts_before_writing(tmp_path):
    settings = Settings(repo_root=tmp_path)
    with pytest.raises(MissingDirectoryError):
        build_index(settings)
    assert not settings.output_path.exists()


def test_rebuild_is_stable_apart_from_date(source_dir, settings):
    _seed_two_files(source_dir)
    first = build_index(settings, today=date(2026, 1, 2)).content
    second = build_index(settings, today=date(2026, 1, 2)).content
    later = build_index(settings, today=date(2026, 3, 4)).content

    assert first == second
    assert first.replace("2026-01-02", "2026-03-04") == later


def test_overwrite_leaves_no_temp_files(source_dir, settings):
    _seed_two_files(source_dir)
    settings.output_path.write_text("stale", encoding="utf-8")
    build_index(settings, today=date(2026, 1, 2))

    names = sorted(p.name for p in settings.patterns_path.iterdir())
    assert names == ["PATTERN_INDEX.md", "extracted_data", "pattern_index.json"]
    assert "stale" not in settings.output_path.read_text(encoding="utf-8")


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_written_files_follow_umask(source_dir, settings):
    _seed_two_files(source_dir)
    previous = os.umask(0o022)
    try:
        result = build_index(settings, today=date(2026, 1, 2))
    finally:
        os.umask(previous)

    assert stat.S_IMODE(result.output_path.stat().st_mode) == 0o644
    assert stat.S_IMODE(result.json_output_path.stat().st_mode) == 0o644

import sys
from pathlib import Path
from typing import Iterable

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pattern_index.config import Settings


def pattern_block(ordinal, title, problem=None, concept=None) -> str:
    lines = [f"## Pattern {ordinal}: {title}"]
    if problem is not None:
        lines.append(f"PROBLEM: {problem}")
    if concept is not None:
        lines.append(f"CONCEPT: {concept}")
    return "\n".join(lines)


def write_pattern_file(directory: Path, name: str, blocks: Iterable[str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}_patterns.txt"
    body = "\n---\n".join(blocks)
    path.write_text(f"# Pattern Extractor output for {name}.md\n\n{body}\n", encoding="utf-8")
    return path


@pytest.fixture()
def source_dir(tmp_path):
    path = tmp_path / "patterns" / "extracted_data"
    path.mkdir(parents=True)
    return path


@pytest.fixture()
def settings(tmp_path, source_dir):
    return Settings(repo_root=tmp_path)


@pytest.fixture()
def env_repo_root(tmp_path, source_dir, monkeypatch):
    monkeypatch.setenv("PATTERN_INDEX_REPO_ROOT", str(tmp_path))
    from pattern_index.config import get_settings

    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


def mapping_rows(content: str):
    section = content.split("## Quick Problem Search", 1)[1].split("## Pattern File Directory", 1)[0]
    return [line for line in section.splitlines() if line.startswith("|")][2:]


def directory_section(content: str) -> str:
    return content.split("## Pattern File Directory", 1)[1].split("## Cross-Reference Map", 1)[0]

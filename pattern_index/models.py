from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class SourceDocument(BaseModel):
    name: str
    path: Path
    text: str

    model_config = ConfigDict(frozen=True)


class PatternRecord(BaseModel):
    ordinal: int = Field(ge=0)
    title: str = Field(min_length=1)
    problem: str = ""
    concept: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def section(self) -> str:
        return f"Pattern {self.ordinal}"


class PatternFile(BaseModel):
    """Records extracted from one source document, keyed by target file name."""

    file: str
    patterns: Tuple[PatternRecord, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def pattern_count(self) -> int:
        return len(self.patterns)


class KeywordMapping(BaseModel):
    keywords: Tuple[str, ...]
    pattern_file: str
    section: str
    title: str

    model_config = ConfigDict(frozen=True)

    @property
    def keywords_text(self) -> str:
        return ", ".join(self.keywords)


class ValidationReport(BaseModel):
    file_count: int
    expected_files: int
    pattern_count: int
    mapping_count: int
    char_count: int
    token_estimate: float
    target_tokens: int
    tolerance: float
    files_ok: bool
    tokens_ok: bool
    warnings: List[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.files_ok and self.tokens_ok


class BuildResult(BaseModel):
    files: List[PatternFile]
    mappings: List[KeywordMapping]
    content: str
    report: ValidationReport
    output_path: Path
    json_output_path: Optional[Path] = None

    @property
    def pattern_count(self) -> int:
        return sum(f.pattern_count for f in self.files)

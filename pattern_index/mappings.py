from typing import List, Sequence

from .config import Settings
from .keywords import derive_keywords
from .models import KeywordMapping, PatternFile, SourceDocument
from .parser import parse_patterns


def target_file_name(document: SourceDocument, settings: Settings) -> str:
    return document.name + settings.target_extension


def extract_pattern_files(documents: Sequence[SourceDocument], settings: Settings) -> List[PatternFile]:
    return [
        PatternFile(
            file=target_file_name(document, settings),
            patterns=parse_patterns(document.text, settings.grammar),
        )
        for document in documents
    ]


def build_keyword_mappings(files: Sequence[PatternFile], settings: Settings) -> List[KeywordMapping]:
    """One mapping per pattern, in traversal order, capped at ``max_mappings``."""
    mappings: List[KeywordMapping] = []
    for pattern_file in files:
        for record in pattern_file.patterns:
            if len(mappings) >= settings.max_mappings:
                return mappings
            mappings.append(
                KeywordMapping(
                    keywords=tuple(derive_keywords(record, settings)),
                    pattern_file=pattern_file.file,
                    section=record.section,
                    title=record.title,
                )
            )
    return mappings


def count_patterns(files: Sequence[PatternFile]) -> int:
    return sum(pattern_file.pattern_count for pattern_file in files)

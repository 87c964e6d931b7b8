from .config import Settings, get_settings
from .errors import MissingDirectoryError, PatternIndexError
from .models import KeywordMapping, PatternFile, PatternRecord, SourceDocument, ValidationReport
from .pipeline import build_index

__all__ = [
    "KeywordMapping",
    "MissingDirectoryError",
    "PatternFile",
    "PatternIndexError",
    "PatternRecord",
    "Settings",
    "SourceDocument",
    "ValidationReport",
    "build_index",
    "get_settings",
]

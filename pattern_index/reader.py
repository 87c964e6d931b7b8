from pathlib import Path
from typing import List

from .config import Settings
from .errors import MissingDirectoryError
from .models import SourceDocument


def short_name(path: Path, suffix: str) -> str:
    name = path.name
    if suffix and name.endswith(suffix):
        return name[: -len(suffix)]
    return path.stem


def load_documents(directory: Path, suffix: str) -> List[SourceDocument]:
    """Read every ``*<suffix>`` file in ``directory`` in file-name order.

    An empty directory is a valid, empty corpus; a missing one is fatal.
    """
    if not directory.is_dir():
        raise MissingDirectoryError(directory)
    documents = []
    for path in sorted(directory.iterdir(), key=lambda p: p.name):
        if not path.is_file() or not path.name.endswith(suffix):
            continue
        documents.append(
            SourceDocument(
                name=short_name(path, suffix),
                path=path,
                text=path.read_text(encoding="utf-8"),
            )
        )
    return documents


def discover_pattern_files(settings: Settings) -> List[SourceDocument]:
    return load_documents(settings.source_path, settings.file_suffix)

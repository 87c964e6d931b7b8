import logging
from datetime import date
from typing import Optional

from .config import Settings
from .export import build_payload, write_payload, write_text_atomic
from .mappings import build_keyword_mappings, extract_pattern_files
from .models import BuildResult
from .reader import discover_pattern_files
from .render import render_index
from .validation import validate_index

logger = logging.getLogger(__name__)


def build_index(settings: Settings, today: Optional[date] = None) -> BuildResult:
    """Run one full rebuild: scan, parse, map, render, write, validate.

    Raises MissingDirectoryError before anything is written when the source
    directory is absent. Validation findings are reported, never raised.
    """
    today = today or date.today()

    documents = discover_pattern_files(settings)
    logger.info("Found %d pattern files in %s", len(documents), settings.source_path)

    files = extract_pattern_files(documents, settings)
    mappings = build_keyword_mappings(files, settings)
    content = render_index(mappings, files, today, settings)

    write_text_atomic(settings.output_path, content)

    json_path = settings.json_output_path
    if json_path is not None:
        write_payload(json_path, build_payload(files, mappings, today))

    report = validate_index(content, files, settings, mapping_count=len(mappings))
    for warning in report.warnings:
        logger.warning(warning)

    return BuildResult(
        files=files,
        mappings=mappings,
        content=content,
        report=report,
        output_path=settings.output_path,
        json_output_path=json_path,
    )

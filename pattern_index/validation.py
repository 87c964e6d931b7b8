from typing import Sequence

from .config import Settings
from .models import PatternFile, ValidationReport


def estimate_tokens(text: str, chars_per_token: int = 4) -> float:
    return len(text) / chars_per_token


def validate_index(
    content: str, files: Sequence[PatternFile], settings: Settings, mapping_count: int = 0
) -> ValidationReport:
    """Compare the rendered index with the configured targets.

    The report is diagnostic only; callers write the index regardless.
    """
    file_count = len(files)
    char_count = len(content)
    token_estimate = estimate_tokens(content, settings.chars_per_token)
    target = settings.target_tokens

    files_ok = file_count == settings.expected_files
    tokens_ok = abs(token_estimate - target) < target * settings.token_tolerance

    warnings = []
    if not files_ok:
        warnings.append(f"Pattern files: found {file_count}, expected {settings.expected_files}")
    if not tokens_ok:
        warnings.append(
            f"Estimated tokens {int(token_estimate)} outside {target} ±{int(round(settings.token_tolerance * 100))}%"
        )

    return ValidationReport(
        file_count=file_count,
        expected_files=settings.expected_files,
        pattern_count=sum(f.pattern_count for f in files),
        mapping_count=mapping_count,
        char_count=char_count,
        token_estimate=token_estimate,
        target_tokens=target,
        tolerance=settings.token_tolerance,
        files_ok=files_ok,
        tokens_ok=tokens_ok,
        warnings=warnings,
    )

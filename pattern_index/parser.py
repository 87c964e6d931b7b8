"""Split extracted pattern files into :class:`PatternRecord` entries.

An extracted file looks like::

    # Pattern Extractor output for genserver.md

    ## Pattern 1: GenServer State Handling
    PROBLEM: state leaks across requests
    CONCEPT: keep state in the process
    ---
    ## Pattern 2: ...

Every delimiter-separated block that mentions the header marker yields exactly
one record, so per-file block and record counts always agree.
"""
import logging
from typing import List, Optional, Tuple

from .config import HeaderGrammar
from .models import PatternRecord

logger = logging.getLogger(__name__)

MAX_ORDINAL_DIGITS = 9


def strip_boilerplate(lines: List[str], grammar: HeaderGrammar) -> List[str]:
    for idx, line in enumerate(lines):
        if grammar.marker in line:
            return lines[idx:]
    return []


def split_blocks(text: str, grammar: HeaderGrammar) -> List[str]:
    """Return delimiter-separated blocks that carry the header marker."""
    lines = strip_boilerplate(text.splitlines(), grammar)
    blocks: List[List[str]] = [[]]
    for line in lines:
        if line.strip() == grammar.delimiter:
            blocks.append([])
        else:
            blocks[-1].append(line)
    candidates = ["\n".join(block) for block in blocks]
    return [block for block in candidates if grammar.marker in block]


def parse_ordinal(raw: str) -> int:
    raw = raw.strip()
    if not raw.isdecimal() or len(raw) > MAX_ORDINAL_DIGITS:
        return 0
    return int(raw)


def parse_header(line: str, grammar: HeaderGrammar) -> Optional[Tuple[int, str]]:
    match = grammar.header_pattern.match(line.strip())
    if not match:
        return None
    return parse_ordinal(match.group("ordinal")), match.group("title").strip()


def find_field(lines: List[str], prefix: str) -> str:
    for line in lines:
        stripped = line.strip()
        if stripped.startswith(prefix):
            return stripped[len(prefix):].strip()
    return ""


def _header_index(lines: List[str], grammar: HeaderGrammar) -> Optional[int]:
    for idx, line in enumerate(lines):
        if line.startswith(grammar.marker):
            return idx
    return None


def parse_block(block: str, grammar: HeaderGrammar) -> PatternRecord:
    lines = [line for line in block.strip().splitlines() if line.strip()]
    header_idx = _header_index(lines, grammar)
    header = parse_header(lines[header_idx], grammar) if header_idx is not None else None
    if header is None:
        logger.warning("Could not find pattern header in block starting %r", lines[0][:60] if lines else "")
        return PatternRecord(ordinal=0, title=grammar.fallback_title)

    ordinal, title = header
    rest = lines[header_idx + 1:]
    return PatternRecord(
        ordinal=ordinal,
        title=title,
        problem=find_field(rest, grammar.problem_prefix),
        concept=find_field(rest, grammar.concept_prefix),
    )


def parse_patterns(text: str, grammar: Optional[HeaderGrammar] = None) -> Tuple[PatternRecord, ...]:
    grammar = grammar or HeaderGrammar()
    return tuple(parse_block(block, grammar) for block in split_blocks(text, grammar))

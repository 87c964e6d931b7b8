"""Markdown rendering of the pattern lookup index.

Rendering is a pure function of its inputs: the same mappings, files and date
always produce the same text. No validation happens here.
"""
from datetime import date
from typing import List, Sequence

from .config import Settings
from .models import KeywordMapping, PatternFile

UNCATEGORIZED_HEADING = "Uncategorized"


def format_mappings_table(mappings: Sequence[KeywordMapping]) -> str:
    rows = [
        "| Problem Keywords | Pattern File | Section |",
        "|------------------|--------------|---------|",
    ]
    rows.extend(f"| {m.keywords_text} | {m.pattern_file} | {m.section} |" for m in mappings)
    return "\n".join(rows)


def format_file_entry(pattern_file: PatternFile, settings: Settings) -> str:
    lines = [f"**{pattern_file.file}** ({pattern_file.pattern_count} patterns)"]
    for record in pattern_file.patterns[: settings.directory_preview]:
        lines.append(f"- {record.title[: settings.directory_title_width]} → P{record.ordinal}")
    return "\n".join(lines)


def format_pattern_directory(files: Sequence[PatternFile], settings: Settings) -> str:
    """Group files under their category headings.

    Categories without any present file are skipped; files no category claims
    are listed last so every scanned file appears exactly once.
    """
    sections: List[str] = []
    claimed = set()
    for category in settings.categories:
        members = [f for f in files if f.file in category.files and f.file not in claimed]
        if not members:
            continue
        claimed.update(f.file for f in members)
        entries = "\n\n".join(format_file_entry(f, settings) for f in members)
        sections.append(f"### {category.heading}\n\n{entries}")

    leftovers = [f for f in files if f.file not in claimed]
    if leftovers:
        entries = "\n\n".join(format_file_entry(f, settings) for f in leftovers)
        sections.append(f"### {UNCATEGORIZED_HEADING}\n\n{entries}")
    return "\n\n".join(sections)


def format_cross_references(settings: Settings) -> str:
    rows = [
        "| Problem | Primary Pattern | Related Patterns |",
        "|---------|-----------------|------------------|",
    ]
    rows.extend(
        f"| {ref.problem} | {ref.primary} | {', '.join(ref.related)} |" for ref in settings.cross_references
    )
    return "\n".join(rows)


def format_checklist(settings: Settings) -> str:
    pct = int(round(settings.token_tolerance * 100))
    return f"""### Pre-Publish Validation

- [ ] All {settings.expected_files} pattern files are listed in Pattern File Directory
- [ ] All patterns have corresponding table entries
- [ ] No duplicate keywords in same category
- [ ] All pattern numbers match actual pattern sections
- [ ] All cross-references are valid (files exist)
- [ ] High-level keywords are unique across categories
- [ ] Specific keywords include both Problem and Concept terms
- [ ] File names are lowercase with underscores
- [ ] Pattern numbers are correct (sequential starting at 1)
- [ ] Token count is within target (~{settings.target_tokens} tokens ±{pct}%)

### Post-Publish Validation

- [ ] AI can successfully search for problem keywords
- [ ] AI can navigate to correct pattern file and section
- [ ] No broken links to pattern files
- [ ] Cross-references are bidirectional (if A links to B, B links to A)
- [ ] Category groupings are logical and intuitive
- [ ] Pattern File Directory matches actual pattern count per file"""


def format_maintenance(
    mappings: Sequence[KeywordMapping], files: Sequence[PatternFile], today: date, settings: Settings
) -> str:
    total_patterns = sum(f.pattern_count for f in files)
    return f"""**Last Updated**: {today.isoformat()}
**Total Pattern Files**: {len(files)}
**Total Patterns**: {total_patterns}
**Total Keyword Mappings**: {len(mappings)}

### When to Update

- Add new pattern file → Run update script + review
- Modify existing pattern → Update keywords manually or run script
- Remove pattern file → Run script to clean up references
- Change pattern numbers → Run script to update section numbers

### Update Process

1. **Automated Update:**
   ```bash
   {settings.update_command}
   ```

2. **Manual Review:**
   - Check generated keywords for accuracy
   - Verify cross-references are valid
   - Ensure pattern numbers match actual sections

3. **Validation:**
   - Complete Validation Checklist (above)
   - Test search with sample queries"""


def render_index(
    mappings: Sequence[KeywordMapping], files: Sequence[PatternFile], today: date, settings: Settings
) -> str:
    parts = [
        "# Pattern Lookup Index",
        "## How to Use This Index",
        "1. Search for your problem in the Quick Problem Search table\n"
        "2. Load the specified pattern file and section\n"
        "3. Each pattern includes code examples ready to copy",
        "## Quick Problem Search",
        format_mappings_table(mappings),
        "## Pattern File Directory",
    ]
    directory = format_pattern_directory(files, settings)
    if directory:
        parts.append(directory)
    parts.extend(
        [
            "## Cross-Reference Map",
            format_cross_references(settings),
            "## Validation Checklist",
            format_checklist(settings),
            "## Maintenance",
            format_maintenance(mappings, files, today, settings),
        ]
    )
    return "\n\n".join(parts) + "\n"

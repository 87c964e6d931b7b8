"""Command line entry points.

``pattern-index`` rebuilds PATTERN_INDEX.md; ``pattern-search`` looks a
problem up in the JSON index. Paths resolve against ``Settings.repo_root``,
which defaults to the source checkout. A non-editable install must set
``PATTERN_INDEX_REPO_ROOT`` (or pass ``--source``/``--output``).
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import jsonschema

from .config import Settings, get_settings
from .errors import MissingDirectoryError
from .export import load_mappings
from .models import BuildResult
from .pipeline import build_index
from .search import search_index


def parse_build_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the pattern lookup index.")
    parser.add_argument("--source", help="Directory holding *_patterns.txt files")
    parser.add_argument("--output", help="Markdown index to (over)write")
    parser.add_argument("--json-output", help="Machine-readable index to (over)write")
    parser.add_argument("--no-json", action="store_true", help="Skip the JSON index")
    parser.add_argument("--strict", action="store_true", help="Exit 1 when validation reports a mismatch")
    parser.add_argument("--quiet", action="store_true", help="Only log errors")
    return parser.parse_args(argv)


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    update = {}
    if args.source:
        update["source_dir"] = str(Path(args.source).resolve())
    if args.output:
        update["output_file"] = str(Path(args.output).resolve())
    if args.json_output:
        update["json_output_file"] = str(Path(args.json_output).resolve())
    if args.no_json:
        update["json_output_file"] = None
    return settings.model_copy(update=update) if update else settings


def print_summary(result: BuildResult) -> None:
    report = result.report
    print("")
    print("=== Validation ===")
    print(f"Pattern Files: {report.file_count}/{report.expected_files}")
    print("✅ Found all expected pattern files" if report.files_ok else "⚠️  Missing or extra files")
    print(f"Character count: {report.char_count}")
    print(f"Estimated tokens: {int(report.token_estimate)}")
    print(f"Target tokens: {report.target_tokens}")
    if report.tokens_ok:
        print(f"✅ Token count within {int(round(report.tolerance * 100))}% of target")
    else:
        print("⚠️  Token count outside target range")

    print("")
    print("=== Summary ===")
    print(f"Pattern Files: {len(result.files)}")
    print(f"Total Patterns: {result.pattern_count}")
    print(f"Keyword Mappings: {len(result.mappings)}")
    print(f"Validation: {'PASS' if report.passed else 'WARN'}")
    for warning in report.warnings:
        print(f"- {warning}")


def build_main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_build_args(argv)
    logging.basicConfig(level=logging.ERROR if args.quiet else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    settings = apply_overrides(get_settings(), args)

    print("=== Pattern Index Builder ===")
    print(f"Scanning: {settings.source_path}")
    print(f"Output: {settings.output_path}")

    try:
        result = build_index(settings)
    except MissingDirectoryError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    print(f"✅ Wrote: {result.output_path}")
    if result.json_output_path is not None:
        print(f"✅ Wrote: {result.json_output_path}")
    print_summary(result)

    if args.strict and not result.report.passed:
        return 1
    return 0


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def search_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Find the pattern file and section for a problem.")
    parser.add_argument("query", nargs="+")
    parser.add_argument("--index", help="Path to pattern_index.json")
    parser.add_argument("--limit", type=_positive_int, default=5)
    args = parser.parse_args(argv)

    index_path = Path(args.index) if args.index else get_settings().json_output_path
    if index_path is None or not index_path.exists():
        print(f"[ERROR] Index not found: {index_path}. Run pattern-index first.", file=sys.stderr)
        return 1

    try:
        mappings = load_mappings(index_path)
    except json.JSONDecodeError as exc:
        print(f"[ERROR] {index_path}: invalid JSON ({exc})", file=sys.stderr)
        return 1
    except jsonschema.ValidationError as exc:
        print(f"[ERROR] {index_path}: does not match the index schema ({exc.message})", file=sys.stderr)
        return 1

    hits = search_index(" ".join(args.query), mappings, limit=args.limit)
    if not hits:
        print("No matches")
        return 0
    for hit in hits:
        m = hit.mapping
        print(f"{m.pattern_file} § {m.section}: {m.title} (score={hit.score})")
    return 0

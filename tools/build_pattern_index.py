#!/usr/bin/env python
"""Regenerate PATTERN_INDEX.md from the extracted pattern files.

Usage:
  python tools/build_pattern_index.py [--source DIR] [--output FILE] [--strict]
"""
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pattern_index.cli import build_main

if __name__ == "__main__":
    raise SystemExit(build_main())

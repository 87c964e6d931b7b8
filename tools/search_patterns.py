#!/usr/bin/env python
"""Look up which pattern file and section answers a problem.

Usage:
  python tools/search_patterns.py <keywords...> [--index FILE] [--limit N]
"""
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pattern_index.cli import search_main

if __name__ == "__main__":
    raise SystemExit(search_main())

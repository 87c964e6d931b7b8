import json
import os
import tempfile
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Sequence

import jsonschema

from .models import KeywordMapping, PatternFile

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "pattern_index.schema.json"


@lru_cache(maxsize=1)
def load_schema() -> Dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def _default_file_mode() -> int:
    # mkstemp creates 0600 files; match what a plain open() would produce
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_text_atomic(path: Path, content: str) -> None:
    """Replace ``path`` in a single step so readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def build_payload(files: Sequence[PatternFile], mappings: Sequence[KeywordMapping], today: date) -> Dict:
    payload = {
        "generated": today.isoformat(),
        "files": [f.model_dump(mode="json") for f in files],
        "mappings": [m.model_dump(mode="json") for m in mappings],
    }
    jsonschema.validate(payload, load_schema())
    return payload


def write_payload(path: Path, payload: Dict) -> None:
    write_text_atomic(path, json.dumps(payload, indent=2, ensure_ascii=False) + "\n")


def load_mappings(path: Path) -> List[KeywordMapping]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    jsonschema.validate(payload, load_schema())
    return [KeywordMapping(**entry) for entry in payload["mappings"]]

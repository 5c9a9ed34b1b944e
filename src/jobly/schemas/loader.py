"""JSON Schema file loader."""

import json
from pathlib import Path

SCHEMA_DIR = Path(__file__).resolve().parent / "json"


def load_json(path: Path) -> dict:
    """Load a JSON file and return parsed dict."""
    return json.loads(path.read_text(encoding="utf-8"))

"""
Utility functions to parse, coerce and serialize values from various sources.
"""
from pathlib import Path
import json
import sys
from typing import Any

import yaml

from dotmix.core.mixins import mixin_registry
from dotmix.utils.dict_path import MISSING

YAML_EXTENSIONS = {"yaml", "yml"}
JSONL_EXTENSIONS = {"jsonl", "ndjson"}


@mixin_registry.register(category="strings")
def capitalize(s: str) -> str:
    """Uppercase the first character, lowercase the rest."""
    return s[:1].upper() + s[1:].lower()


def parse_value(text: str) -> Any:
    """Helper reads a command-line value as JSON, falling back to the raw string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def parse_document(raw: str, extension: str = "json") -> Any:
    """
    Translates raw text into Python data. JSON lines become a list of
    records; blank lines are skipped.
    """
    ext = extension.lower().strip(".")
    if ext in YAML_EXTENSIONS:
        return yaml.safe_load(raw)
    if ext in JSONL_EXTENSIONS:
        return [json.loads(line) for line in raw.splitlines() if line.strip()]
    return json.loads(raw)


def load_document(source: str | Path) -> Any:
    """Read a JSON, JSONL or YAML file ("-" reads JSON from stdin)."""
    if str(source) == "-":
        return parse_document(sys.stdin.read(), "json")
    source = Path(source)
    return parse_document(source.read_text(encoding="utf-8"), source.suffix or "json")


def _json_default(value: Any) -> Any:
    if value is MISSING:
        return None
    if hasattr(value, "model_dump"):  # pydantic models
        return value.model_dump(mode="json")
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def serialize(data: Any, indent: int | None = 2) -> str:
    """Serialize to JSON. MISSING becomes null, dates become ISO strings."""
    return json.dumps(data, indent=indent, default=_json_default)

"""
Schema Validation Utilities

Validates job-file JSON against the bundled JSON Schema before any
models are built from it. All violations are collected so the user
sees every problem in one run rather than one per attempt.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import ValidationError


@lru_cache(maxsize=None)
def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    schema_path = Path(__file__).parent / f"{name}.schema.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")
    with open(schema_path, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_job(data: Any) -> None:
    """
    Validate job data against ``job.schema.json``.

    Args:
        data: Parsed JSON document

    Raises:
        ValidationError: If the document violates the schema. ``errors``
            lists every violation, ``path`` points at the first one.
    """
    validator = jsonschema.Draft202012Validator(_load_schema("job"))
    violations = sorted(validator.iter_errors(data), key=lambda e: _format_path(e.absolute_path))
    if not violations:
        return

    messages = [
        f"{_format_path(e.absolute_path) or '<root>'}: {e.message}" for e in violations
    ]
    raise ValidationError(
        f"Job file failed validation: {messages[0]}",
        path=_format_path(violations[0].absolute_path),
        errors=messages,
    )


def _format_path(parts) -> str:
    return ".".join(str(p) for p in parts)

"""
schemas/__init__.py

JSON Schema definitions and validation utilities for overlay annotations.
Provides validation for the geometry and annotation-item wire shapes.

Validation reports problems; it never raises.  Parsing (``models``) is
separately tolerant, so hosts may validate first to surface errors, or
skip validation and let malformed shapes be dropped.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import Draft202012Validator

# Schema file paths
SCHEMA_DIR = os.path.dirname(os.path.abspath(__file__))
ANNOTATION_SCHEMA_PATH = os.path.join(SCHEMA_DIR, "annotation_schema.json")

# Cached schema and per-definition validators
_annotation_schema: Optional[Dict] = None
_validators: Dict[str, Draft202012Validator] = {}


def get_annotation_schema() -> Dict:
    """Load and return the annotation schema."""
    global _annotation_schema
    if _annotation_schema is None:
        with open(ANNOTATION_SCHEMA_PATH, "r", encoding="utf-8") as f:
            _annotation_schema = json.load(f)
    return _annotation_schema


def _validator_for(def_name: Optional[str]) -> Draft202012Validator:
    """Validator for the whole document (None) or one ``$defs`` entry."""
    key = def_name or ""
    if key not in _validators:
        schema = get_annotation_schema()
        if def_name is None:
            target = schema
        else:
            target = {
                "$schema": "https://json-schema.org/draft/2020-12/schema",
                "$defs": schema.get("$defs", {}),
                **schema["$defs"][def_name],
            }
        _validators[key] = Draft202012Validator(target)
    return _validators[key]


def _validate(data: Any, def_name: Optional[str]) -> Tuple[bool, List[str]]:
    errors = sorted(_validator_for(def_name).iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    if not errors:
        return True, []

    error_messages = []
    for error in errors:
        path = " -> ".join(str(p) for p in error.absolute_path) if error.absolute_path else "root"
        error_messages.append(f"{path}: {error.message}")
    return False, error_messages


def validate_document(data: Dict) -> Tuple[bool, List[str]]:
    """
    Validate a document of the form ``{"annotations": [...]}``.

    Returns:
        Tuple of (is_valid, list_of_error_messages)
    """
    return _validate(data, None)


def validate_annotation(annotation: Dict) -> Tuple[bool, List[str]]:
    """Validate a single annotation item."""
    return _validate(annotation, "annotationItem")


def validate_geometry(geometry: Dict) -> Tuple[bool, List[str]]:
    """Validate a geometry object ``{circles?, lines?, boxes?, polygons?}``."""
    return _validate(geometry, "geometry")

"""
validator/schema.py — JSON Schema (draft 2020-12) dokumentu modelu.

Dokument opisuje assembly (maszyny składowe) i maszynę sterującą:

    {
      "assembly": "traffic",
      "machines": {"m1": {"states": [...], "initial": [...], "transitions": [...]}},
      "control":  {"name": "ctl", "states": [...], "transitions": [...]}
    }
"""

from __future__ import annotations

from typing import Any

_IDENT = {"type": "string", "pattern": "^[A-Za-z0-9_]+$"}

_MACHINE_TRANSITION: dict[str, Any] = {
    "type": "object",
    "required": ["source", "target"],
    "additionalProperties": False,
    "properties": {
        "source": _IDENT,
        "target": _IDENT,
        "event":  _IDENT,
    },
}

_MACHINE: dict[str, Any] = {
    "type": "object",
    "required": ["states"],
    "additionalProperties": False,
    "properties": {
        "states":      {"type": "array", "items": _IDENT, "minItems": 1},
        "initial":     {"type": "array", "items": _IDENT},
        "transitions": {"type": "array", "items": _MACHINE_TRANSITION},
    },
}

_CONTROL_STATE: dict[str, Any] = {
    "type": "object",
    "required": ["name"],
    "additionalProperties": False,
    "properties": {
        "name":        _IDENT,
        "constraints": {"type": "string"},
    },
}

_CONTROL_TRANSITION: dict[str, Any] = {
    "type": "object",
    "required": ["source", "target"],
    "additionalProperties": False,
    "properties": {
        "source":  _IDENT,
        "target":  _IDENT,
        "guard":   {"type": "string", "minLength": 1},
        "actions": {"type": "array", "items": {"type": "string"}},
        "event":   _IDENT,
        "enabled": {"type": "boolean"},
    },
}

MODEL_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "pwsem model",
    "type": "object",
    "required": ["assembly", "machines", "control"],
    "additionalProperties": False,
    "properties": {
        "assembly": _IDENT,
        "machines": {
            "type": "object",
            "minProperties": 1,
            "propertyNames": {"pattern": "^[A-Za-z0-9_]+$"},
            "additionalProperties": _MACHINE,
        },
        "control": {
            "type": "object",
            "required": ["name", "states", "transitions"],
            "additionalProperties": False,
            "properties": {
                "name":        _IDENT,
                "states":      {"type": "array", "items": _CONTROL_STATE},
                "transitions": {"type": "array", "items": _CONTROL_TRANSITION},
            },
        },
    },
}

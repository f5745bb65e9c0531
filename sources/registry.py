from __future__ import annotations

from typing import Dict, List

from sources.base import RecordSchema


_REGISTRY: Dict[str, RecordSchema] = {}


def register(schema: RecordSchema) -> None:
    _REGISTRY[schema.kind] = schema


def get_schema(kind: str) -> RecordSchema:
    if kind not in _REGISTRY:
        raise KeyError(f"Unknown record kind: {kind}")
    return _REGISTRY[kind]


def available_kinds() -> List[str]:
    return list(_REGISTRY)


def available_schemas() -> Dict[str, RecordSchema]:
    return dict(_REGISTRY)

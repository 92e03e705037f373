"""JSON rendering of dereferenced document fragments.

Dereferencing a recursive schema produces a recursive Python structure. When
rendering, a container that is already being rendered further up the tree is
replaced by ``{"$circular": "<pointer>"}``, where the pointer locates its
first occurrence in the rendered value.
"""

import json
from typing import Any, Dict


def _escape(token: Any) -> str:
    return str(token).replace("~", "~0").replace("/", "~1")


def break_cycles(value: Any) -> Any:
    """Return a copy of ``value`` with reference cycles replaced by markers."""
    return _copy(value, "#", {})


def _copy(value: Any, pointer: str, active: Dict[int, str]) -> Any:
    if not isinstance(value, (dict, list)):
        return value

    marker = id(value)
    if marker in active:
        return {"$circular": active[marker]}

    active[marker] = pointer
    try:
        if isinstance(value, dict):
            return {
                key: _copy(item, f"{pointer}/{_escape(key)}", active)
                for key, item in value.items()
            }
        return [
            _copy(item, f"{pointer}/{index}", active)
            for index, item in enumerate(value)
        ]
    finally:
        del active[marker]


def dump_json(value: Any) -> str:
    """Pretty-print ``value`` as JSON, tolerating cycles and YAML scalars."""
    return json.dumps(
        break_cycles(value), indent=2, ensure_ascii=False, default=str
    )

# servicekit/utils.py
"""
Small pure helpers shared by the core package.

- Name normalization (`snake`, `humanize`)
- Dotted/colon path import (`import_string`)
- Constructor-parameter normalization for queue transport (`serialize_params`)
"""

from __future__ import annotations

import enum
import importlib
import json
import re
import uuid
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel

__all__ = ["snake", "humanize", "import_string", "serialize_value", "serialize_params"]


def snake(s: str) -> str:
    """Convert CamelCase or mixedCase to snake_case."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", s)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def humanize(s: str) -> str:
    """`MySpecialOperation` -> `My special operation`."""
    words = re.sub(r"[\-_]+", " ", snake(s)).strip()
    return words[:1].upper() + words[1:]


def import_string(path: str) -> Any:
    """Import an object from ``"pkg.module:attr"`` or ``"pkg.module.attr"``.

    The colon form allows nested attributes (``"pkg.mod:Outer.Inner"``).
    """
    if ":" in path:
        mod_name, _, attr_path = path.partition(":")
    else:
        mod_name, _, attr_path = path.rpartition(".")
    if not mod_name or not attr_path:
        raise ImportError(f"{path!r} is not a valid import path")
    obj: Any = importlib.import_module(mod_name)
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ImportError(f"{path!r}: {mod_name!r} has no attribute {attr_path!r}") from exc
    return obj


def serialize_value(v: Any) -> Any:
    if isinstance(v, BaseModel):
        return v.model_dump(mode="json")
    if isinstance(v, enum.Enum):
        return v.value
    if isinstance(v, uuid.UUID):
        return str(v)
    if isinstance(v, (datetime, date)):
        return v.isoformat()
    if isinstance(v, Mapping):
        return {k: serialize_value(x) for k, x in v.items()}
    if isinstance(v, (list, tuple)):
        return [serialize_value(x) for x in v]
    return v


def serialize_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """
    Normalize constructor kwargs for queue transport:
    - Pydantic models converted via .model_dump()
    - Enums converted to their value
    - UUIDs converted to strings
    - datetime and date converted to ISO format string

    Raises TypeError if the result still is not JSON-serializable.
    """
    out = {str(k): serialize_value(v) for k, v in params.items()}
    json.dumps(out)
    return out

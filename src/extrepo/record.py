from __future__ import annotations

from typing import Mapping, cast

# raw extension record, as decoded from a repository's JSON payload
RawRecord = Mapping[str, object]


def as_str(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    return None


def as_map(value: object) -> RawRecord | None:
    if not isinstance(value, Mapping):
        return None
    return cast(RawRecord, value)


def as_string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def as_map_list(value: object) -> list[RawRecord]:
    if not isinstance(value, list):
        return []
    return [cast(RawRecord, item) for item in value if isinstance(item, Mapping)]


def as_int(value: object, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        if isinstance(value, float):
            return int(value)
        return int(str(value))
    except (OverflowError, ValueError):
        return default


def as_float(value: object, default: float = 0.0) -> float:
    if isinstance(value, bool) or value is None:
        return default
    try:
        return float(cast(str, value))
    except (TypeError, ValueError):
        return default


def as_bool(value: object, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return default

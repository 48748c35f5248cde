"""Helpers shared by the tool modules."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..client import GHLClient, get_client


def api() -> GHLClient:
    return get_client()


def location(location_id: Optional[str] = None) -> str:
    """The given location, or the configured one."""
    return location_id or api().location_id


def unwrap(data: Any, key: str, default: Any = None) -> Any:
    """Return ``data[key]`` when the response wraps its payload, else ``data``.

    GHL is inconsistent: most endpoints answer ``{"contact": {...}}`` but a
    few return the object itself.
    """
    if isinstance(data, dict) and key in data:
        return data[key]
    if default is not None and not data:
        return default
    return data


def items(data: Any, key: str) -> List[Any]:
    """Return the list stored under ``key`` (or the response itself if it is a list)."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        value = data.get(key)
        if isinstance(value, list):
            return value
    return []


def pick(data: Any, key: str, default: Any = None) -> Any:
    if isinstance(data, dict):
        value = data.get(key)
        return default if value is None else value
    return default


def only_set(**fields: Any) -> Dict[str, Any]:
    """Keyword arguments whose value is not None."""
    return {k: v for k, v in fields.items() if v is not None}

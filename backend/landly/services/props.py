"""
Prop extraction over the generic schema tree.
Wrong JSON types never raise: every helper degrades to its default.
"""
from typing import Any, Dict, List, Optional


def as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def get_str(mapping: Optional[Dict[str, Any]], key: str, default: str = "") -> str:
    """Return mapping[key] when it is a string, else default."""
    if not isinstance(mapping, dict):
        return default
    value = mapping.get(key)
    return value if isinstance(value, str) else default


def get_text(mapping: Optional[Dict[str, Any]], key: str, default: str = "") -> str:
    """Like get_str but also accepts numbers (prices, ratings)."""
    if not isinstance(mapping, dict):
        return default
    value = mapping.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return default


def get_bool(mapping: Optional[Dict[str, Any]], key: str) -> bool:
    if not isinstance(mapping, dict):
        return False
    value = mapping.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def to_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def to_dicts(value: Any) -> List[Dict[str, Any]]:
    """Object entries of a JSON array; non-objects are dropped."""
    return [item for item in to_list(value) if isinstance(item, dict)]


def to_strings(value: Any) -> List[str]:
    return [item for item in to_list(value) if isinstance(item, str)]

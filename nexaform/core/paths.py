"""
NexaForm Field Paths
====================

A field path addresses a value inside a nested submission payload,
using "/" between segments:

    user/address/city

The same path gives the HTML name (user[address][city]) and the
element id (userAddressCity) of the rendered control.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

SEPARATOR = "/"


def split_path(path: str) -> List[str]:
    """
    Split a path into lookup segments.

    Segments are trimmed and empty ones dropped, so "/a//b " gives
    ["a", "b"].
    """
    if not path:
        return []
    return [segment.strip() for segment in path.split(SEPARATOR) if segment.strip()]


def to_field_name(path: str, prefix: str = "") -> str:
    """
    Convert a path to an HTML field name.

    A leading "/" asks for an absolute name: it is removed from the path
    and appended to the prefix.

    Example:
        >>> to_field_name("user/address/city")
        'user[address][city]'
        >>> to_field_name("/items/0")
        '/items[0]'
    """
    if not path:
        return prefix

    if path.startswith(SEPARATOR):
        path = path[1:]
        prefix += SEPARATOR

    first, sep, rest = path.partition(SEPARATOR)

    if not sep:
        return prefix + first

    return prefix + first + "".join(f"[{segment}]" for segment in rest.split(SEPARATOR))


def to_element_id(path: str) -> str:
    """
    Convert a path to a camel-cased element id.

    Example:
        >>> to_element_id("user/address/city")
        'userAddressCity'
        >>> to_element_id("a/bb/cc")
        'aBbCc'
    """
    result = ""

    for segment in (path or "").split(SEPARATOR):
        segment = segment.lower()
        result += segment if not result else segment[:1].upper() + segment[1:]

    return result


class _Absent:
    """Marker for "no value at this path". Falsy, distinct from None."""

    _instance = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Any = _Absent()


def resolve(path: Optional[str], payload: Any) -> Any:
    """
    Look a path up inside a nested payload.

    Walks mappings by key and lists by integer index. Nothing in the
    path is ever evaluated.

    Args:
        path: Slash-delimited field path
        payload: Nested mapping of submitted values

    Returns:
        The value, or ABSENT when the path is empty, the payload is
        empty or a segment is missing

    Example:
        >>> resolve("user/address/city", {"user": {"address": {"city": "Oslo"}}})
        'Oslo'
        >>> resolve("user/phone", {"user": {}})
        ABSENT
    """
    segments = split_path(path or "")

    if not segments or not payload:
        return ABSENT

    current = payload

    for segment in segments:
        if isinstance(current, Mapping):
            if segment not in current:
                return ABSENT
            current = current[segment]
        elif isinstance(current, (list, tuple)) and segment.isdigit():
            index = int(segment)
            if index >= len(current):
                return ABSENT
            current = current[index]
        else:
            return ABSENT

    return current

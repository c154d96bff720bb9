"""
NexaForm Request Object
=======================

Read-only view of one HTTP request, as forms need it.

Query strings and urlencoded bodies are turned into nested maps the
way browsers name nested fields:

    user[name]=Ann&user[tags][]=a&user[tags][]=b

becomes

    {"user": {"name": "Ann", "tags": ["a", "b"]}}

Forms read these maps with slash paths ("user/name").
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Coroutine,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
)
from urllib.parse import parse_qs, parse_qsl

try:
    import orjson
    _json_loads = orjson.loads
except ImportError:
    _json_loads = json.loads

_BRACKET = re.compile(r"\[([^\[\]]*)\]")


def split_field_name(name: str) -> List[str]:
    """
    Split a bracketed field name into keys.

    Example:
        >>> split_field_name("user[address][city]")
        ['user', 'address', 'city']
        >>> split_field_name("tags[]")
        ['tags', '']
    """
    start = name.find("[")
    if start <= 0 or not name.endswith("]"):
        return [name]

    keys = _BRACKET.findall(name[start:])
    if "".join(f"[{key}]" for key in keys) != name[start:]:
        return [name]

    return [name[:start]] + keys


def _next_index(node: Dict[str, Any]) -> str:
    indexes = [int(key) for key in node if key.isdigit()]
    return str(max(indexes) + 1 if indexes else 0)


def _listify(node: Any) -> Any:
    """Turn maps keyed "0".."n-1" into lists, depth first."""
    if not isinstance(node, dict):
        return node

    items = {key: _listify(value) for key, value in node.items()}

    if items and list(items) == [str(i) for i in range(len(items))]:
        return list(items.values())

    return items


def parse_nested(pairs: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    """
    Build a nested payload from flat (name, value) pairs.

    Later values win for repeated names, "[]" appends.

    Args:
        pairs: Decoded form fields in submission order

    Returns:
        Nested mapping
    """
    root: Dict[str, Any] = {}

    for name, value in pairs:
        keys = split_field_name(name)
        current = root

        for key in keys[:-1]:
            if key == "":
                key = _next_index(current)
            child = current.get(key)
            if not isinstance(child, dict):
                child = {}
                current[key] = child
            current = child

        last = keys[-1] if keys[-1] != "" else _next_index(current)
        current[last] = value

    return {key: _listify(value) for key, value in root.items()}


@dataclass
class QueryParams:
    """
    Query string parameters.

    Supports:
    - Single values: ?name=value -> params.get("name") = "value"
    - Multiple values: ?tag=a&tag=b -> params.get_list("tag") = ["a", "b"]
    """
    _data: Dict[str, List[str]] = field(default_factory=dict)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get single value (first if multiple)."""
        values = self._data.get(key)
        return values[0] if values else default

    def get_list(self, key: str) -> List[str]:
        """Get all values for a key."""
        return self._data.get(key, [])

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> List[str]:
        return list(self._data.keys())


class Headers:
    """
    Case-insensitive HTTP headers container.

    Example:
        headers["Content-Type"]  # application/json
        headers["content-type"]  # application/json (same)
    """

    def __init__(self, raw_headers: Iterable[Tuple[Any, Any]]) -> None:
        self._headers: Dict[str, str] = {}

        for key, value in raw_headers:
            if isinstance(key, bytes):
                key = key.decode("latin-1")
            if isinstance(value, bytes):
                value = value.decode("latin-1")
            self._headers[key.lower()] = value

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get header value."""
        return self._headers.get(key.lower(), default)

    def __getitem__(self, key: str) -> str:
        return self._headers[key.lower()]

    def __contains__(self, key: str) -> bool:
        return key.lower() in self._headers

    def to_dict(self) -> Dict[str, str]:
        return self._headers.copy()


class Request:
    """
    HTTP request snapshot.

    Created from an ASGI scope plus the already-read body. Everything a
    form needs is available synchronously:

    - all_query() / all_post(): nested payload maps
    - get_query(): single query value
    - is_ajax / is_ajax_form(): partial-render detection
    - state: per-request storage shared by forms and middleware

    Example:
        request = await Request.from_scope(scope, receive)

        form = Form(request, form_id="login")

        # Tests and other frameworks can skip ASGI entirely
        request = Request.from_data(post={"user": {"name": "Ann"}})
    """

    __slots__ = (
        "_scope",
        "_body",
        "_query_payload",
        "_post_payload",
        "method",
        "path",
        "query_string",
        "query",
        "headers",
        "state",
    )

    def __init__(self, scope: Mapping[str, Any], body: bytes = b"") -> None:
        self._scope = scope
        self._body = body
        self._query_payload: Optional[Dict[str, Any]] = None
        self._post_payload: Optional[Dict[str, Any]] = None

        self.method: str = str(scope.get("method", "GET")).upper()
        self.path: str = scope.get("path", "/")

        query_string = scope.get("query_string", b"")
        if isinstance(query_string, bytes):
            query_string = query_string.decode("utf-8", errors="replace")
        self.query_string: str = query_string

        self.query = QueryParams(_data=parse_qs(self.query_string, keep_blank_values=True))
        self.headers = Headers(scope.get("headers", []))

        # Request state (forms mirror their errors here)
        self.state: Dict[str, Any] = {}

    @classmethod
    async def from_scope(
        cls,
        scope: Mapping[str, Any],
        receive: Callable[[], Coroutine[Any, Any, Dict[str, Any]]],
    ) -> "Request":
        """Read the whole body from an ASGI receive channel."""
        chunks: List[bytes] = []

        while True:
            message = await receive()
            if message["type"] == "http.request":
                chunk = message.get("body", b"")
                if chunk:
                    chunks.append(chunk)
                if not message.get("more_body", False):
                    break
            elif message["type"] == "http.disconnect":
                raise RuntimeError("Client disconnected")

        return cls(scope, b"".join(chunks))

    @classmethod
    def from_data(
        cls,
        query: Optional[Mapping[str, Any]] = None,
        post: Optional[Mapping[str, Any]] = None,
        method: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        path: str = "/",
    ) -> "Request":
        """
        Build a request from already-deserialized payloads.

        Args:
            query: Nested query payload
            post: Nested body payload
            method: HTTP method (POST when a body is given, else GET)
            headers: Header name -> value
            path: Request path
        """
        scope = {
            "type": "http",
            "method": method or ("POST" if post else "GET"),
            "path": path,
            "query_string": b"",
            "headers": list((headers or {}).items()),
        }
        request = cls(scope)
        request._query_payload = dict(query or {})
        request._post_payload = dict(post or {})

        flat: Dict[str, List[str]] = {}
        for key, value in request._query_payload.items():
            if isinstance(value, str):
                flat[key] = [value]
        request.query = QueryParams(_data=flat)

        return request

    @property
    def body(self) -> bytes:
        return self._body

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "") or ""

    def all_query(self) -> Dict[str, Any]:
        """Nested map of query string parameters."""
        if self._query_payload is None:
            self._query_payload = parse_nested(
                parse_qsl(self.query_string, keep_blank_values=True)
            )
        return self._query_payload

    def all_post(self) -> Dict[str, Any]:
        """
        Nested map of the request body.

        Understands urlencoded forms and JSON objects; any other body,
        or JSON that does not parse, gives an empty map. Bytes that are
        not UTF-8 are replaced, not raised.
        """
        if self._post_payload is None:
            self._post_payload = self._parse_body()
        return self._post_payload

    def _parse_body(self) -> Dict[str, Any]:
        if not self._body:
            return {}

        if "application/json" in self.content_type:
            try:
                data = _json_loads(self._body)
            except ValueError:
                return {}
            return data if isinstance(data, dict) else {}

        if "application/x-www-form-urlencoded" in self.content_type or not self.content_type:
            return parse_nested(parse_qsl(self._body.decode("utf-8", errors="replace"), keep_blank_values=True))

        return {}

    def get_query(self, key: str, default: Any = None) -> Any:
        """Top-level query value, or default."""
        return self.all_query().get(key, default)

    @property
    def is_ajax(self) -> bool:
        """Check if request is AJAX/XHR."""
        return (self.headers.get("x-requested-with", "") or "").lower() == "xmlhttprequest"

    def is_ajax_form(self, form_id: Optional[str]) -> bool:
        """
        Check for a partial render request aimed at one form.

        The client script adds ?ajax=form&form=<id> to the URL it posts to.
        """
        if not form_id:
            return False
        return self.get_query("ajax") == "form" and self.get_query("form") == form_id

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.path}>"

"""
NexaForm Response Objects
=========================

HTTP responses a form can produce on its own:
- HTML fragments for partial (AJAX) renders
- JSON redirect instructions for the client script
- Plain redirects for normal submissions

A form that needs to answer before the page is composed raises
ShortCircuit with the response; ShortCircuitMiddleware sends it.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any, Callable, Coroutine, Dict, List, Optional

try:
    import orjson

    def _json_dumps(obj: Any) -> bytes:
        return orjson.dumps(obj)
except ImportError:
    def _json_dumps(obj: Any) -> bytes:
        return json.dumps(obj, ensure_ascii=False).encode("utf-8")


HTTP_STATUS_PHRASES = {s.value: s.phrase for s in HTTPStatus}


class Response:
    """
    Base HTTP Response class.

    Example:
        return Response("Hello, World!")

        response = Response("OK")
        response.headers["X-Custom"] = "value"
    """

    media_type: str = "text/plain"
    charset: str = "utf-8"

    def __init__(
        self,
        content: Any = None,
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
        media_type: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.headers: Dict[str, str] = dict(headers or {})

        if media_type:
            self.media_type = media_type

        self.body = self._render_content(content)

        if "content-type" not in {k.lower() for k in self.headers}:
            content_type = self.media_type
            if self.charset and content_type.startswith("text/"):
                content_type += f"; charset={self.charset}"
            self.headers["Content-Type"] = content_type

        self.headers["Content-Length"] = str(len(self.body))

    def _render_content(self, content: Any) -> bytes:
        """Convert content to bytes."""
        if content is None:
            return b""
        if isinstance(content, bytes):
            return content
        return str(content).encode(self.charset)

    @property
    def text(self) -> str:
        return self.body.decode(self.charset)

    def _get_headers(self) -> List[tuple]:
        """Get headers as list of tuples for ASGI."""
        return [(k.lower().encode(), v.encode()) for k, v in self.headers.items()]

    async def send(
        self,
        send: Callable[[Dict[str, Any]], Coroutine[Any, Any, None]],
    ) -> None:
        """Send response via ASGI interface."""
        await send({
            "type": "http.response.start",
            "status": self.status_code,
            "headers": self._get_headers(),
        })
        await send({
            "type": "http.response.body",
            "body": self.body,
        })

    @property
    def status_phrase(self) -> str:
        """Get HTTP status phrase."""
        return HTTP_STATUS_PHRASES.get(self.status_code, "Unknown")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.status_code} {self.status_phrase}>"


class HTMLResponse(Response):
    """
    HTML content response.

    Example:
        return HTMLResponse(form.render())
    """

    media_type = "text/html"


class JSONResponse(Response):
    """
    JSON content response.

    Uses orjson for serialization when it is installed.

    Example:
        return JSONResponse({"type": "redirect", "url": "/done"})
    """

    media_type = "application/json"

    def __init__(
        self,
        content: Any = None,
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.data = content
        super().__init__(content, status_code, headers)

    def _render_content(self, content: Any) -> bytes:
        """Serialize content to JSON bytes."""
        return _json_dumps(content)


class RedirectResponse(Response):
    """
    HTTP redirect response.

    Example:
        return RedirectResponse("/login")
    """

    def __init__(
        self,
        url: str,
        status_code: int = 302,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        headers = dict(headers or {})
        headers["Location"] = url
        self.url = url
        super().__init__(content=None, status_code=status_code, headers=headers)


class ShortCircuit(Exception):
    """
    Stop normal response composition and send this response instead.

    Raised by a form for partial renders and redirects. Catch it in the
    request handler, or install ShortCircuitMiddleware.
    """

    def __init__(self, response: Response) -> None:
        super().__init__(repr(response))
        self.response = response


def redirect_instruction(url: str) -> JSONResponse:
    """JSON body the client script follows as a redirect."""
    return JSONResponse({"type": "redirect", "url": url})

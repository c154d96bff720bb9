"""
NexaForm Middleware
===================

Glue between forms and an ASGI-style handler chain.

Middleware follows the "onion" model where each middleware wraps the
next one:

    Request → Middleware.before → Handler
                                     ↓
    Response ← Middleware.after ← Response

ShortCircuitMiddleware sits outermost and turns a ShortCircuit raised
anywhere below it (usually by Form.render or Form.redirect) into the
response it carries.
"""

from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING, Any, Callable, Coroutine, Optional

from nexaform.core.response import Response, ShortCircuit
from nexaform.utils.logger import get_logger

if TYPE_CHECKING:
    from nexaform.core.request import Request

CallNext = Callable[["Request"], Coroutine[Any, Any, Response]]

logger = get_logger("nexaform.middleware")


class Middleware(ABC):
    """
    Base middleware class.

    Lifecycle:
        1. `before()` is called before the handler
        2. If `before()` returns a Response, processing stops
        3. The handler is called
        4. `after()` is called with request and response
    """

    async def before(self, request: "Request") -> Optional[Response]:
        """
        Called before request handling.

        Returns:
            None to continue processing, or Response to short-circuit
        """
        return None

    async def after(self, request: "Request", response: Response) -> Response:
        """Called after request handling."""
        return response

    async def __call__(self, request: "Request", call_next: CallNext) -> Response:
        early_response = await self.before(request)
        if early_response is not None:
            return early_response

        response = await call_next(request)

        return await self.after(request, response)


class ShortCircuitMiddleware(Middleware):
    """
    Send the response carried by a ShortCircuit.

    Example:
        middleware = ShortCircuitMiddleware()

        async def handler(request):
            form = LoginForm(request).form
            return HTMLResponse(layout(form.render()))

        response = await middleware(request, handler)
    """

    async def __call__(self, request: "Request", call_next: CallNext) -> Response:
        try:
            return await super().__call__(request, call_next)
        except ShortCircuit as signal:
            logger.debug(
                "Response short-circuited",
                path=request.path,
                response=type(signal.response).__name__,
            )
            return signal.response


def run_handler(handler: Callable[["Request"], Response], request: "Request") -> Response:
    """
    Synchronous counterpart of ShortCircuitMiddleware.

    Calls the handler and returns either its response or the one a form
    short-circuited with.
    """
    try:
        return handler(request)
    except ShortCircuit as signal:
        return signal.response

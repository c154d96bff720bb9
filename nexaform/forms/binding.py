"""
NexaForm Value Binding
======================

Finds the value a field should show: the form's escaped submission
snapshot first, then the live request payload for the form's method.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, Union

from nexaform.core.paths import ABSENT, resolve
from nexaform.forms.fields import FieldKind, HTTPMethod
from nexaform.security.xss import escape_payload
from nexaform.utils.helpers import is_truthy

if TYPE_CHECKING:
    from nexaform.core.request import Request

__all__ = ["ABSENT", "resolve", "ValueBinder"]


class ValueBinder:
    """
    Resolve bound values for one form.

    Args:
        method: HTTP method the form submits with
        request: Request to fall back to while no snapshot exists
        data_provider: Returns the form's current escaped snapshot

    Example:
        binder = ValueBinder(HTTPMethod.POST, request, lambda: form.data)
        binder.bind(FieldKind.INPUT, "user/name", {"class": "wide"})
        # {"class": "wide", "value": "Ann"}
    """

    def __init__(
        self,
        method: Union[HTTPMethod, str],
        request: Optional["Request"],
        data_provider: Callable[[], Mapping[str, Any]],
    ) -> None:
        self.method = HTTPMethod.parse(method)
        self.request = request
        self._data_provider = data_provider

    def request_payload(self) -> Mapping[str, Any]:
        """Raw payload for the form method, empty without a request."""
        if self.request is None:
            return {}
        if self.method is HTTPMethod.GET:
            return self.request.all_query()
        return self.request.all_post()

    def current(self, path: Optional[str]) -> Any:
        """
        Current value at path, or ABSENT.

        Values read from the request are escaped the same way as the
        form snapshot before anyone sees them.
        """
        data = self._data_provider()
        if data:
            return resolve(path, data)

        value = resolve(path, self.request_payload())
        return value if value is ABSENT else escape_payload(value)

    def bind(
        self,
        kind: Union[FieldKind, str],
        path: Optional[str],
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Copy attributes with the bound value applied.

        A checkbox gets checked="checked" when its value is on; any
        other control gets the value itself.
        """
        bound = dict(attributes or {})
        value = self.current(path)

        if value is ABSENT:
            return bound

        if FieldKind(kind) is FieldKind.CHECKBOX:
            if is_truthy(value):
                bound["checked"] = "checked"
        else:
            bound["value"] = value

        return bound

    def selection(self, path: Optional[str], default: Any = None) -> Any:
        """Bound value at path, or default when nothing was submitted."""
        value = self.current(path)
        return default if value is ABSENT else value

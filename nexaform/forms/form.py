"""
NexaForm Form
=============

One form for one request: declared fields, submitted data, validation
errors and rendering.

Lifecycle:
    BUILT       fields declared, submitted values bound
    VALIDATED   validate() ran the rules
    SUBMITTED   is_submitted() accepted the submission
    REJECTED    identity mismatch, or is_submitted() found errors

Example:
    form = Form(request, action="/register", form_id="register", theme="bootstrap")
    form.fields.add_input("user/email", "E-mail").add_submit_button("Send")

    form.validate({"user/email": ["required", "isEmail"]})
    if form.is_submitted():
        save(form.get("user/email"))
        form.redirect("/thanks")

    html = form.render()
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from nexaform.core.config import get_config
from nexaform.core.paths import ABSENT, resolve
from nexaform.core.response import HTMLResponse, RedirectResponse, ShortCircuit, redirect_instruction
from nexaform.forms.binding import ValueBinder
from nexaform.forms.fields import FieldKind, HTTPMethod
from nexaform.forms.registry import FieldRegistry
from nexaform.forms.renderer import Renderer, get_renderer
from nexaform.security.xss import escape_payload
from nexaform.utils.logger import Logger, get_logger
from nexaform.validation.messages import Locale, MessageCatalog
from nexaform.validation.validator import RuleSpec, Validator

if TYPE_CHECKING:
    from nexaform.core.container import ServiceContainer
    from nexaform.core.request import Request

# Name of the hidden field carrying the form identity
FORM_ID_FIELD = "formId"

# request.state key of the per-request error mirror
ERRORS_STATE_KEY = "form_errors"


class FormState(str, Enum):
    BUILT = "built"
    VALIDATED = "validated"
    SUBMITTED = "submitted"
    REJECTED = "rejected"


class Form:
    """
    Form controller.

    Args:
        request: Current request (None renders an empty form)
        action: Submission URL, defaults to the request path
        method: GET or POST, defaults to form.method from config
        form_id: Identity token; when set, only submissions carrying it count
        theme: Renderer theme, defaults to form.theme from config
        locale: Message locale, defaults to form.locale from config
        ajax: Mark the form for the client-side submit script
        container: Services for builders
        logger: Logger, defaults to "nexaform.form"

    Raises:
        LocaleNotSupportedError: Unknown locale
        FormConfigurationError: Unknown theme
    """

    def __init__(
        self,
        request: Optional["Request"],
        action: Optional[str] = None,
        method: Union[HTTPMethod, str, None] = None,
        form_id: Optional[str] = None,
        theme: Optional[str] = None,
        locale: Union[Locale, str, None] = None,
        ajax: bool = False,
        container: Optional["ServiceContainer"] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        config = get_config()

        self.request = request
        self.action = action if action is not None else (request.path if request is not None else "")
        self.method = HTTPMethod.parse(method or config.get_str("form.method", "POST"))
        self.form_id = form_id
        self.ajax = ajax
        self.container = container

        self.catalog = MessageCatalog(locale or config.get_str("form.locale", "EN"))

        theme = theme or config.get_str("form.theme", "plain")
        linebreak = config.get_bool("form.linebreak", True) if theme == Renderer.theme else None
        self.renderer = get_renderer(theme, linebreak)

        self.logger = (logger or get_logger("nexaform.form")).with_context(form=form_id or self.action)

        self.state = FormState.BUILT
        self._data: Dict[str, Any] = {}
        self._prepared = False
        self._errors: Dict[str, str] = {}
        self._manual_errors: Dict[str, str] = {}

        self.binder = ValueBinder(self.method, request, lambda: self._data)
        self.fields = FieldRegistry(self.binder)

    # Submitted data

    def prepare_data(self) -> bool:
        """
        Take an escaped snapshot of the submitted payload.

        Returns:
            False when there is no request to read from
        """
        if self.request is None:
            return False

        self._data = escape_payload(self.binder.request_payload())
        self._prepared = True
        return True

    @property
    def data(self) -> Dict[str, Any]:
        """Escaped submission snapshot (empty before prepare_data)."""
        return self._data

    def get(self, path: str, default: Any = None) -> Any:
        """Submitted value at path."""
        value = resolve(path, self._data)
        return default if value is ABSENT else value

    def identity_matches(self) -> bool:
        """Whether the snapshot carries this form's identity."""
        if self.form_id is None:
            return True
        return self._data.get(FORM_ID_FIELD) == escape_payload(self.form_id)

    # Validation

    def validate(self, rules: RuleSpec) -> bool:
        """
        Validate the submission.

        Rule errors replace earlier rule errors. Errors added with
        add_error() stay unless a rule fails for the same field.

        Returns:
            False when there is nothing to validate or the identity
            does not match

        Raises:
            RuleSpecError: Malformed rules
        """
        prepared = self.prepare_data()
        validator = Validator(rules, self._data, self.catalog)

        if not prepared:
            return False

        if not self.identity_matches():
            self.state = FormState.REJECTED
            if self._data:
                self.logger.info("Submission rejected: form identity mismatch")
            return False

        self._errors = {**self._manual_errors, **validator.run()}
        self._mirror_errors()
        self.state = FormState.VALIDATED

        if self._errors:
            self.logger.debug("Form has errors", fields=sorted(self._errors))

        return True

    def add_error(self, path: str, message: str) -> None:
        """Attach an error to a field."""
        self._manual_errors[path] = message
        self._errors[path] = message
        self._mirror_errors()

    def _mirror_errors(self) -> None:
        if self.request is None:
            return
        mirror = self.request.state.setdefault(ERRORS_STATE_KEY, {})
        mirror[self.form_id or self.action] = dict(self._errors)

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._errors)

    def has_error(self, path: str) -> bool:
        return path in self._errors

    def get_error(self, path: str) -> Optional[str]:
        return self._errors.get(path)

    def is_submitted(self) -> bool:
        """
        Whether a valid submission of this form arrived.

        True only when there are no errors, data was submitted and the
        identity matches.
        """
        accepted = (
            not self._errors
            and (self._prepared or self.prepare_data())
            and bool(self._data)
            and self.identity_matches()
        )
        self.state = FormState.SUBMITTED if accepted else FormState.REJECTED
        return accepted

    # Output

    def form_attributes(self) -> Dict[str, Any]:
        return {
            "action": self.action,
            "method": self.method.value,
            "id": self.form_id,
            "class": "ajax-form" if self.ajax else None,
        }

    def render(self) -> str:
        """
        Render the form.

        Raises:
            ShortCircuit: The request asked for this form alone; carries
                an HTMLResponse with the inner markup
        """
        if self.form_id is not None and not self.fields.has(FORM_ID_FIELD):
            # own token, never a submitted one
            self.fields.add_field(
                FieldKind.HIDDEN,
                FORM_ID_FIELD,
                attributes={"value": escape_payload(self.form_id)},
                bind=False,
            )

        errors = self._errors if self._data else None

        if self.request is not None and self.request.is_ajax_form(self.form_id):
            self.logger.debug("Partial render")
            raise ShortCircuit(HTMLResponse(self.renderer.render_fields(self.fields, errors)))

        return self.renderer.render_form(self.fields, self.form_attributes(), errors)

    def redirect(self, url: str) -> None:
        """
        Finish the request with a redirect.

        Partial-render requests get a JSON instruction the client
        script follows.

        Raises:
            ShortCircuit: Always
        """
        if self.request is not None and self.request.is_ajax_form(self.form_id):
            self.logger.debug("Redirect instruction", url=url)
            raise ShortCircuit(redirect_instruction(url))
        raise ShortCircuit(RedirectResponse(url))

    def __repr__(self) -> str:
        return f"<Form {self.form_id or self.action!r} {self.method.value} {self.state.value}>"

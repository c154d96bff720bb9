"""
NexaForm - Server-Side Forms for Python Web Applications
========================================================

Declare form fields, bind values from the previous submission, render
plain or Bootstrap markup and validate submitted values with a small,
localizable rule set.

Features:
---------
- Slash paths for nested fields ("user/address/city" -> user[address][city])
- Chainable field declarations with automatic value binding
- Ordered validation rules, first failure per field
- English and Polish messages with Slavic plural forms
- Plain and Bootstrap 5 renderers
- Partial (AJAX) renders and redirect instructions
- Class-based forms with an explicit registry

Quick Start:
    from nexaform import Form, Request

    request = Request.from_data(post={"email": "ann@example.com", "formId": "signup"})

    form = Form(request, action="/signup", form_id="signup")
    form.fields.add_input("email", "E-mail").add_submit_button("Sign up")
    form.validate({"email": ["required", "isEmail"]})

    if form.is_submitted():
        ...

    html = form.render()
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "NexaForm Team"
__license__ = "MIT"

from typing import TYPE_CHECKING

# Core imports (always available)
from nexaform.core.request import Request
from nexaform.core.response import HTMLResponse, JSONResponse, RedirectResponse, Response, ShortCircuit
from nexaform.core.config import Config, get_config
from nexaform.exceptions import (
    FormConfigurationError,
    FormNotFoundError,
    LocaleNotSupportedError,
    NexaFormError,
    RuleSpecError,
    ValidationError,
    ValidationFailure,
)
from nexaform.forms import Form, FormBuilder, FormRegistry, get_renderer

if TYPE_CHECKING:
    from nexaform.core.container import ServiceContainer
    from nexaform.core.middleware import ShortCircuitMiddleware
    from nexaform.validation import MessageCatalog, Validator, validate
    from nexaform.utils.logger import Logger


def __getattr__(name: str):
    """Lazy loading of less common components."""
    _imports = {
        "ServiceContainer": "nexaform.core.container",
        "ShortCircuitMiddleware": "nexaform.core.middleware",
        "Validator": "nexaform.validation.validator",
        "validate": "nexaform.validation.validator",
        "MessageCatalog": "nexaform.validation.messages",
        "Logger": "nexaform.utils.logger",
    }

    if name in _imports:
        import importlib
        module = importlib.import_module(_imports[name])
        return getattr(module, name)

    raise AttributeError(f"module 'nexaform' has no attribute '{name}'")


__all__ = [
    # Metadata
    "__version__",
    "__author__",
    "__license__",
    # Core
    "Request",
    "Response",
    "HTMLResponse",
    "JSONResponse",
    "RedirectResponse",
    "ShortCircuit",
    "Config",
    "get_config",
    # Forms
    "Form",
    "FormBuilder",
    "FormRegistry",
    "get_renderer",
    # Errors
    "NexaFormError",
    "FormConfigurationError",
    "RuleSpecError",
    "LocaleNotSupportedError",
    "FormNotFoundError",
    "ValidationFailure",
    "ValidationError",
    # Lazy
    "ServiceContainer",
    "ShortCircuitMiddleware",
    "Validator",
    "validate",
    "MessageCatalog",
    "Logger",
]

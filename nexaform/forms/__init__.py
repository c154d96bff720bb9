"""
NexaForm Forms
==============

Field declaration, value binding, rendering and the form controller.
"""

from nexaform.forms.binding import ABSENT, ValueBinder, resolve
from nexaform.forms.bootstrap import BootstrapRenderer
from nexaform.forms.builder import FormBuilder, FormRegistry
from nexaform.forms.fields import Field, FieldKind, Group, HTTPMethod, SelectOptions
from nexaform.forms.form import FORM_ID_FIELD, Form, FormState
from nexaform.forms.registry import FieldRegistry
from nexaform.forms.renderer import Renderer, get_renderer, render_attributes

__all__ = [
    "ABSENT",
    "resolve",
    "ValueBinder",
    "Field",
    "FieldKind",
    "Group",
    "HTTPMethod",
    "SelectOptions",
    "FieldRegistry",
    "Renderer",
    "BootstrapRenderer",
    "get_renderer",
    "render_attributes",
    "Form",
    "FormState",
    "FORM_ID_FIELD",
    "FormBuilder",
    "FormRegistry",
]

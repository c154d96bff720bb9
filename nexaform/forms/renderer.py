"""
NexaForm Renderer
=================

Turns declared fields into HTML.

Renderers only decide markup and CSS classes. Values are already bound
(and escaped) on the fields; the error map comes from the form.

Themes:
- plain: bare controls, a <br /> after every field
- bootstrap: Bootstrap 5 classes and column wrappers (see bootstrap.py)

Example:
    renderer = get_renderer("plain")
    html = renderer.render_form(form.fields, {"action": "/login", "method": "POST"})
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from nexaform.core.paths import to_element_id, to_field_name
from nexaform.exceptions import FormConfigurationError
from nexaform.forms.fields import Field, FieldKind, Group

Errors = Optional[Mapping[str, str]]

# Value of the type attribute per control kind; None means no attribute
INPUT_TYPES: Dict[FieldKind, Optional[str]] = {
    FieldKind.INPUT: "text",
    FieldKind.NUMBER: "number",
    FieldKind.CHECKBOX: "checkbox",
    FieldKind.HIDDEN: "hidden",
    FieldKind.SUBMIT: "submit",
    FieldKind.TEXTAREA: None,
    FieldKind.SELECT: None,
}


def render_attributes(attributes: Mapping[str, Any]) -> str:
    """
    Render tag attributes, each preceded by a space.

    None, False and structured values are left out, True gives a bare
    attribute. A value containing a double quote is wrapped in single
    quotes.

    Example:
        >>> render_attributes({"name": "q", "required": True, "data": {"a": 1}})
        ' name="q" required'

        render_attributes({"onclick": 'go("x")'})
        # ->  onclick='go("x")'
    """
    parts: List[str] = []

    for key, value in attributes.items():
        if value is None or value is False:
            continue
        if isinstance(value, (dict, list, tuple, set, frozenset)):
            continue
        if value is True:
            parts.append(f" {key}")
            continue

        text = str(value)
        if '"' in text:
            parts.append(f" {key}='{text}'")
        else:
            parts.append(f' {key}="{text}"')

    return "".join(parts)


def join_classes(*classes: Optional[str]) -> str:
    """Join class lists, collapsing whitespace."""
    return " ".join(" ".join(c for c in classes if c).split())


class Renderer:
    """
    Plain theme.

    Args:
        linebreak: Emit <br /> after each field and label
    """

    theme = "plain"

    def __init__(self, linebreak: bool = True) -> None:
        self.linebreak = linebreak

    @property
    def br(self) -> str:
        return "<br />" if self.linebreak else ""

    def render_form(
        self,
        fields: Iterable[Field],
        form_attributes: Mapping[str, Any],
        errors: Errors = None,
    ) -> str:
        """Render all fields wrapped in a <form> tag."""
        return f"<form{render_attributes(form_attributes)}>{self.render_fields(fields, errors)}</form>"

    def render_fields(self, fields: Iterable[Field], errors: Errors = None) -> str:
        """
        Render fields in declaration order.

        Args:
            fields: Declared fields
            errors: Error map to display; pass None before submission
        """
        errors = errors or {}
        group: Optional[Group] = None
        html: List[str] = []

        for item in fields:
            if item.kind is FieldKind.GROUP_START:
                group = item.group
            elif item.kind is FieldKind.GROUP_STOP:
                group = None

            html.append(self.render_field(item, errors, group))

        return "".join(html)

    def render_field(self, item: Field, errors: Mapping[str, str], group: Optional[Group] = None) -> str:
        kind = item.kind

        if kind is FieldKind.RAW:
            return item.content or ""
        if kind is FieldKind.TITLE:
            return f"<legend>{item.label}</legend>"
        if kind is FieldKind.GROUP_START:
            return self.render_group_start(item.group or Group())
        if kind is FieldKind.GROUP_STOP:
            return "</div>"
        if kind is FieldKind.STATIC_TEXT:
            return self.render_static_text(item) + self.br

        return self.render_control(item, errors.get(item.path or ""), group) + self.br

    def render_group_start(self, group: Group) -> str:
        row = dict(group.row_attributes)
        row["class"] = join_classes(row.get("class"), "row")
        return f"<div{render_attributes(row)}>"

    def render_static_text(self, item: Field) -> str:
        return f"<span{render_attributes({'class': item.css_class})}>{item.label}</span>"

    def control_attributes(self, item: Field) -> Dict[str, Any]:
        """Base attributes of a control; declared attributes override them."""
        attributes: Dict[str, Any] = {
            "name": to_field_name(item.path) if item.path else None,
            "id": to_element_id(item.path) if item.path else None,
            "type": INPUT_TYPES.get(item.kind),
        }
        attributes.update(item.attributes)
        return attributes

    def render_tag(self, item: Field, attributes: Dict[str, Any]) -> str:
        """Render the control tag itself."""
        tag = "input"
        content = ""

        if item.kind is FieldKind.TEXTAREA:
            tag = "textarea"
            value = attributes.pop("value", None)
            content = "" if value is None else str(value)
        elif item.kind is FieldKind.SELECT:
            tag = "select"
            attributes.pop("value", None)
            content = self.render_options(item)

        return f"<{tag}{render_attributes(attributes)}>{content}</{tag}>"

    def render_options(self, item: Field) -> str:
        if item.options is None:
            return ""

        html: List[str] = []
        for key, label in item.options.choices.items():
            selected = " selected" if item.options.is_selected(key) else ""
            html.append(f'<option value="{key}"{selected}>{label}</option>')
        return "".join(html)

    def render_label(self, item: Field, element_id: Optional[str]) -> str:
        if not item.label:
            return ""
        return f"<label{render_attributes({'for': element_id})}>{item.label}</label>{self.br}"

    def render_error(self, message: Optional[str]) -> str:
        if message is None:
            return ""
        return f'<div class="validation">{message}</div>'

    def render_control(self, item: Field, error: Optional[str], group: Optional[Group]) -> str:
        attributes = self.control_attributes(item)

        if item.kind is FieldKind.CHECKBOX:
            return f"<input{render_attributes(attributes)} />{item.label or ''}{self.render_error(error)}"

        label = self.render_label(item, attributes.get("id"))
        return label + self.render_tag(item, attributes) + self.render_error(error)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} theme={self.theme!r}>"


def get_renderer(theme: Optional[str] = None, linebreak: Optional[bool] = None) -> Renderer:
    """
    Get a renderer for a theme name.

    Args:
        theme: "plain" or "bootstrap" (default "plain")
        linebreak: Override the theme's linebreak setting

    Raises:
        FormConfigurationError: Unknown theme
    """
    from nexaform.forms.bootstrap import BootstrapRenderer

    themes = {
        Renderer.theme: Renderer,
        BootstrapRenderer.theme: BootstrapRenderer,
    }
    name = (theme or Renderer.theme).lower()

    if name not in themes:
        raise FormConfigurationError(f"Unknown form theme: {theme}")

    renderer_class = themes[name]
    if linebreak is None:
        return renderer_class()
    return renderer_class(linebreak=linebreak)

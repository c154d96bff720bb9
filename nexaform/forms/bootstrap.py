"""
NexaForm Bootstrap Renderer
===========================

Bootstrap 5 markup: every field sits in a "mb-3" wrapper, which gets a
"col-N" class inside a group.

Checkboxes post through a hidden companion input ("_" + checkbox id)
kept at 1/0 by an onchange handler, so an unticked box still submits
a value.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from nexaform.core.paths import to_element_id, to_field_name
from nexaform.forms.fields import Field, FieldKind, Group
from nexaform.forms.renderer import Renderer, join_classes, render_attributes

CHECKBOX_SYNC = "$('#_' + $(this).attr('id')).val($(this).is(':checked') ? 1 : 0)"


class BootstrapRenderer(Renderer):
    """Bootstrap theme."""

    theme = "bootstrap"

    def __init__(self, linebreak: bool = False) -> None:
        super().__init__(linebreak=linebreak)

    def wrapper_attributes(self, group: Optional[Group]) -> Dict[str, Any]:
        attributes: Dict[str, Any] = {}
        column = None

        if group is not None:
            attributes.update(group.col_attributes)
            column = f"col-{group.columns}"

        attributes["class"] = join_classes("mb-3", column, attributes.get("class"))
        return attributes

    def render_field(self, item: Field, errors: Mapping[str, str], group: Optional[Group] = None) -> str:
        if item.kind in (FieldKind.RAW, FieldKind.TITLE, FieldKind.GROUP_START, FieldKind.GROUP_STOP):
            return super().render_field(item, errors, group)

        html = f"<div{render_attributes(self.wrapper_attributes(group))}>"

        if item.kind is FieldKind.STATIC_TEXT:
            html += self.render_static_text(item)
        else:
            html += self.render_control(item, errors.get(item.path or ""), group)

        return html + "</div>" + self.br

    def control_attributes(self, item: Field) -> Dict[str, Any]:
        attributes = super().control_attributes(item)
        # a declared class replaces the theme class
        attributes.setdefault("class", item.css_class or "form-control")
        return attributes

    def render_label(self, item: Field, element_id: Optional[str]) -> str:
        if not item.label:
            return ""
        return f'<label{render_attributes({"for": element_id, "class": "form-label"})}>{item.label}</label><br />'

    def render_error(self, message: Optional[str]) -> str:
        if message is None:
            return ""
        return f'<div class="validation text-danger">{message}</div>'

    def render_companion(self, item: Field) -> str:
        """Hidden input carrying 1/0 for a checkbox."""
        attributes = {
            "name": to_field_name(item.path or ""),
            "id": "_" + to_element_id(item.path or ""),
            "type": "hidden",
            "value": 1 if item.checked else 0,
        }
        return f"<input{render_attributes(attributes)}></input>"

    def render_control(self, item: Field, error: Optional[str], group: Optional[Group]) -> str:
        attributes = self.control_attributes(item)
        css = attributes.get("class")

        if error is not None:
            css = join_classes(css, "border-danger")

        if item.kind is FieldKind.SUBMIT:
            css = join_classes(css, "btn btn-primary")

        if item.kind is FieldKind.CHECKBOX:
            attributes["name"] = None
            attributes["class"] = join_classes((css or "").replace("form-control", ""), "form-check-input")
            attributes["onchange"] = CHECKBOX_SYNC

            label = ""
            if item.label:
                label = (
                    f'<label{render_attributes({"for": attributes.get("id"), "class": "form-check-label ms-2"})}>'
                    f"{item.label}</label><br />"
                )

            return (
                f"<input{render_attributes(attributes)}></input>"
                + label
                + self.render_error(error)
                + self.render_companion(item)
            )

        attributes["class"] = css
        label = self.render_label(item, attributes.get("id"))
        return label + self.render_tag(item, attributes) + self.render_error(error)

"""
NexaForm Field Registry
=======================

Ordered, append-only list of form entries with a chainable builder API.

Example:
    fields = FieldRegistry(binder)
    (fields
        .add_section_title("Account")
        .start_group(columns=6)
        .add_input("user/name", "Name")
        .add_input("user/email", "E-mail", {"type": "email"})
        .stop_group()
        .add_checkbox("terms", "I accept the terms")
        .add_submit_button("Register"))
"""

from __future__ import annotations

from typing import Any, Collection, Iterator, List, Mapping, Optional, Union

from nexaform.exceptions import FormConfigurationError
from nexaform.forms.binding import ValueBinder
from nexaform.forms.fields import Field, FieldKind, Group, SelectOptions

Attributes = Optional[Mapping[str, Any]]


class FieldRegistry:
    """
    Declared fields of one form.

    Every control goes through add_field(), which binds the submitted
    value before the field is stored.
    """

    def __init__(self, binder: ValueBinder) -> None:
        self.binder = binder
        self._fields: List[Field] = []

    def add_field(
        self,
        kind: Union[FieldKind, str],
        path: Optional[str],
        label: Optional[str] = None,
        attributes: Attributes = None,
        options: Optional[SelectOptions] = None,
        css_class: Optional[str] = None,
        bind: bool = True,
    ) -> "FieldRegistry":
        """
        Append a control.

        With bind=False the declared attributes are kept as given, even
        when a value for the path was submitted.

        Raises:
            FormConfigurationError: A value control was declared without a path
        """
        kind = FieldKind(kind)

        if kind.needs_path and (not isinstance(path, str) or not path.strip()):
            raise FormConfigurationError(f"Field of kind '{kind.value}' needs a path, got {path!r}")

        bound = self.binder.bind(kind, path, attributes) if path and bind else dict(attributes or {})

        self._fields.append(Field(
            kind=kind,
            path=path,
            label=label,
            attributes=bound,
            options=options,
            css_class=css_class,
        ))
        return self

    def add_input(self, path: str, label: Optional[str] = None, attributes: Attributes = None) -> "FieldRegistry":
        return self.add_field(FieldKind.INPUT, path, label, attributes)

    def add_float_input(self, path: str, label: Optional[str] = None, attributes: Attributes = None) -> "FieldRegistry":
        """Numeric input stepping by 0.01 unless a step is given."""
        return self.add_field(FieldKind.NUMBER, path, label, {"step": "0.01", **(attributes or {})})

    def add_textarea(self, path: str, label: Optional[str] = None, attributes: Attributes = None) -> "FieldRegistry":
        return self.add_field(FieldKind.TEXTAREA, path, label, attributes)

    def add_select(
        self,
        path: str,
        choices: Mapping[Any, Any],
        selected: Union[None, str, Collection[str]] = None,
        label: Optional[str] = None,
        attributes: Attributes = None,
    ) -> "FieldRegistry":
        """
        Append a select.

        Args:
            path: Field path
            choices: Option value -> option label, in display order
            selected: Preselected key, or several keys
            label: Label text
            attributes: Extra attributes of the select tag

        A submitted value replaces selected.
        """
        selected = self.binder.selection(path, selected)
        return self.add_field(
            FieldKind.SELECT,
            path,
            label,
            attributes,
            options=SelectOptions(choices, selected),
            css_class="form-select",
        )

    def add_checkbox(self, path: str, label: Optional[str] = None, attributes: Attributes = None) -> "FieldRegistry":
        return self.add_field(FieldKind.CHECKBOX, path, label, attributes)

    def add_input_hidden(self, path: str, value: Any = "") -> "FieldRegistry":
        """Hidden input; a submitted value replaces the declared one."""
        return self.add_field(FieldKind.HIDDEN, path, None, {"value": self.binder.selection(path, value)})

    def add_submit_button(self, value: str, attributes: Attributes = None) -> "FieldRegistry":
        return self.add_field(FieldKind.SUBMIT, None, None, {"value": value, **(attributes or {})})

    def add_static_text(self, text: str, css_class: Optional[str] = None) -> "FieldRegistry":
        """Text shown inside the form, not submitted."""
        self._fields.append(Field(kind=FieldKind.STATIC_TEXT, label=text, css_class=css_class))
        return self

    def add_raw_markup(self, content: str) -> "FieldRegistry":
        """Markup emitted verbatim."""
        self._fields.append(Field(kind=FieldKind.RAW, content=content))
        return self

    def start_group(
        self,
        columns: int = 6,
        row_attributes: Attributes = None,
        col_attributes: Attributes = None,
    ) -> "FieldRegistry":
        """
        Open a row; following fields get `columns` width.

        Groups do not nest: a second start_group replaces the first.
        """
        group = Group(columns, row_attributes or {}, col_attributes or {})
        self._fields.append(Field(kind=FieldKind.GROUP_START, group=group))
        return self

    def stop_group(self) -> "FieldRegistry":
        self._fields.append(Field(kind=FieldKind.GROUP_STOP))
        return self

    def add_section_title(self, title: str) -> "FieldRegistry":
        self._fields.append(Field(kind=FieldKind.TITLE, label=title))
        return self

    def has(self, path: str) -> bool:
        """Whether a field with this path was declared."""
        return any(item.path == path for item in self._fields)

    def paths(self) -> List[str]:
        return [item.path for item in self._fields if item.path]

    def __iter__(self) -> Iterator[Field]:
        return iter(list(self._fields))

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"<FieldRegistry fields={len(self._fields)}>"


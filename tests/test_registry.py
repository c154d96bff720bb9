"""
Field declaration.
"""

import pytest

from nexaform.exceptions import FormConfigurationError
from nexaform.forms.binding import ValueBinder
from nexaform.forms.fields import FieldKind
from nexaform.forms.registry import FieldRegistry


def bound_registry(data):
    return FieldRegistry(ValueBinder("POST", None, lambda: data))


def test_chaining_keeps_declaration_order(registry):
    result = (registry
        .add_section_title("Account")
        .start_group(columns=4)
        .add_input("user/name", "Name")
        .add_textarea("user/bio")
        .stop_group()
        .add_raw_markup("<hr />")
        .add_static_text("Note", css_class="muted")
        .add_submit_button("Save"))

    assert result is registry
    assert len(registry) == 8
    assert [item.kind for item in registry] == [
        FieldKind.TITLE,
        FieldKind.GROUP_START,
        FieldKind.INPUT,
        FieldKind.TEXTAREA,
        FieldKind.GROUP_STOP,
        FieldKind.RAW,
        FieldKind.STATIC_TEXT,
        FieldKind.SUBMIT,
    ]


def test_float_input_step(registry):
    registry.add_float_input("price").add_float_input("weight", attributes={"step": "0.5"})

    price, weight = list(registry)
    assert price.kind is FieldKind.NUMBER
    assert price.attributes["step"] == "0.01"
    assert weight.attributes["step"] == "0.5"


def test_bound_value_is_stored():
    registry = bound_registry({"user": {"name": "Ann"}})
    registry.add_input("user/name", "Name", {"maxlength": 20})

    field = next(iter(registry))
    assert field.value == "Ann"
    assert field.attributes["maxlength"] == 20


def test_select_uses_submitted_value():
    registry = bound_registry({"lang": "pl"})
    registry.add_select("lang", {"en": "English", "pl": "Polish"}, selected="en")

    field = next(iter(registry))
    assert field.css_class == "form-select"
    assert field.options.is_selected("pl")
    assert not field.options.is_selected("en")


def test_select_declared_selection(registry):
    registry.add_select("lang", {"en": "English", "pl": "Polish"}, selected="en")

    assert next(iter(registry)).options.is_selected("en")


def test_select_several_keys(registry):
    registry.add_select("tags", {1: "One", 2: "Two", 3: "Three"}, selected=["1", "3"])

    options = next(iter(registry)).options
    assert options.multiple
    assert [key for key in options.choices if options.is_selected(key)] == [1, 3]


def test_hidden_value_replaced_by_submission():
    registry = bound_registry({"token": "submitted"})
    registry.add_input_hidden("token", "declared").add_input_hidden("other", "declared")

    token, other = list(registry)
    assert token.value == "submitted"
    assert other.value == "declared"


def test_submit_button_attributes(registry):
    registry.add_submit_button("Send", {"name": "go"})

    field = next(iter(registry))
    assert field.path is None
    assert dict(field.attributes) == {"value": "Send", "name": "go"}


def test_checkbox_checked_from_submission():
    registry = bound_registry({"terms": "1", "news": "0"})
    registry.add_checkbox("terms", "Terms").add_checkbox("news", "News")

    terms, news = list(registry)
    assert terms.checked
    assert not news.checked


@pytest.mark.parametrize("path", ["", "   ", None])
def test_value_fields_need_a_path(registry, path):
    with pytest.raises(FormConfigurationError):
        registry.add_field(FieldKind.INPUT, path)


def test_select_needs_a_path(registry):
    with pytest.raises(FormConfigurationError):
        registry.add_select("", {"a": "A"})


def test_has_and_paths(registry):
    registry.add_input("email").add_checkbox("terms").add_submit_button("Go")

    assert registry.has("email")
    assert not registry.has("phone")
    assert registry.paths() == ["email", "terms"]


def test_fields_are_read_only(registry):
    registry.add_input("email", attributes={"class": "x"})
    field = next(iter(registry))

    with pytest.raises(TypeError):
        field.attributes["class"] = "y"

    with pytest.raises(AttributeError):
        field.label = "changed"


def test_group_defaults(registry):
    registry.start_group()

    group = next(iter(registry)).group
    assert group.columns == 6
    assert dict(group.row_attributes) == {}


def test_unbound_field_keeps_declared_value():
    registry = bound_registry({"formId": "other"})
    registry.add_field(FieldKind.HIDDEN, "formId", attributes={"value": "mine"}, bind=False)

    assert next(iter(registry)).value == "mine"

"""
Message catalogs and plural forms.
"""

import pytest

from nexaform.exceptions import FormConfigurationError, LocaleNotSupportedError
from nexaform.validation.messages import (
    Locale,
    MessageCatalog,
    inflect_word,
    plural_index,
    replace_inflections,
)

FORMS = ["znak", "znaki", "znaków"]


@pytest.mark.parametrize("number", [1, 21, 31, 101])
def test_first_form(number):
    assert plural_index(number) == 0


@pytest.mark.parametrize("number", [2, 3, 4, 22, 23, 24, 102])
def test_second_form(number):
    assert plural_index(number) == 1


@pytest.mark.parametrize("number", [0, 5, 9, 10, 11, 12, 13, 14, 15, 20, 25, 111, 112])
def test_third_form(number):
    assert plural_index(number) == 2


def test_inflect_word():
    assert inflect_word(1, FORMS) == "1 znak"
    assert inflect_word(3, FORMS) == "3 znaki"
    assert inflect_word(5, FORMS) == "5 znaków"
    assert inflect_word("14", FORMS) == "14 znaków"


def test_short_form_list_reuses_last_form():
    assert inflect_word(5, ["item", "items"]) == "5 items"
    assert inflect_word(1, ["item", "items"]) == "1 item"


def test_replace_inflections():
    text = "Masz 22 [plik,pliki,plików] i 5 [folder,foldery,folderów]."

    assert replace_inflections(text) == "Masz 22 pliki i 5 folderów."


def test_text_without_lists_unchanged():
    assert replace_inflections("Nothing [here] 5 times") == "Nothing [here] 5 times"


class TestMessageCatalog:
    def test_english_default(self):
        catalog = MessageCatalog()

        assert catalog.locale is Locale.EN
        assert catalog.format("length_max", length=2) == "The field cannot have more than 2 characters."

    def test_polish(self):
        catalog = MessageCatalog("pl")

        assert catalog.format("length_min", length=5) == "Pole nie może mieć mniej niż 5 znaków."
        assert catalog.format("decimalMax", decimal=2) == "Pole nie może mieć więcej niż 2 miejsca po przecinku."

    def test_unsupported_locale(self):
        with pytest.raises(LocaleNotSupportedError) as exc:
            MessageCatalog.from_name("DE")

        assert isinstance(exc.value, FormConfigurationError)
        assert str(exc.value) == "Language not supported: DE"

    def test_from_name_none_is_english(self):
        assert MessageCatalog.from_name(None).locale is Locale.EN

    def test_override_is_per_catalog(self):
        custom = MessageCatalog().override(required="Please fill this in.")

        assert custom.get("required") == "Please fill this in."
        assert MessageCatalog().get("required") == "This field cannot be empty."

    def test_every_locale_has_every_key(self):
        keys = set(MessageCatalog(Locale.EN)._messages)

        for locale in Locale:
            catalog = MessageCatalog(locale)
            assert all(key in catalog for key in keys)

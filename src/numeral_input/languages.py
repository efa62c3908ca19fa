"""Culture definitions used when formatting and parsing numbers.

Delimiters and currency symbols come from the CLDR data shipped with Babel;
each culture only adds its currency and the suffixes of the ``a`` format
token, which CLDR does not define in numbro's short form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property

from babel import Locale
from babel.numbers import get_currency_symbol, get_decimal_symbol, get_group_symbol

from numeral_input.errors import UnknownLanguageError

DEFAULT_LANGUAGE = "en-US"


def _abbreviations(thousand: str, million: str, billion: str, trillion: str) -> dict[str, str]:
    return {
        "thousand": thousand,
        "million": million,
        "billion": billion,
        "trillion": trillion,
    }


@dataclass(frozen=True)
class Language:
    """A Babel locale plus the numbro-specific details of one culture.

    ``abbreviations`` maps ``thousand``, ``million``, ``billion`` and
    ``trillion`` to the suffix printed by the ``a`` format token.
    """

    code: str
    currency: str
    abbreviations: dict[str, str] = field(
        default_factory=lambda: _abbreviations("k", "m", "b", "t")
    )

    @cached_property
    def locale(self) -> Locale:
        return Locale.parse(self.code, sep="-")

    @property
    def thousands(self) -> str:
        """Group separator, e.g. ``','`` for en-US."""
        return get_group_symbol(self.locale)

    @property
    def decimal(self) -> str:
        """Decimal separator, e.g. ``','`` for de-DE."""
        return get_decimal_symbol(self.locale)

    @property
    def currency_symbol(self) -> str:
        return get_currency_symbol(self.currency, self.locale)


_LANGUAGES: dict[str, Language] = {
    lang.code: lang
    for lang in (
        Language(code="en-US", currency="USD"),
        Language(code="en-GB", currency="GBP"),
        Language(
            code="de-DE",
            currency="EUR",
            abbreviations=_abbreviations("k", "Mio", "Mrd", "Bio"),
        ),
        Language(
            code="fr-FR",
            currency="EUR",
            abbreviations=_abbreviations("k", "M", "Md", "T"),
        ),
        Language(
            code="it-IT",
            currency="EUR",
            abbreviations=_abbreviations("k", "Mln", "Mrd", "Bln"),
        ),
        Language(
            code="es-ES",
            currency="EUR",
            abbreviations=_abbreviations("k", "mm", "b", "t"),
        ),
    )
}


def available_languages() -> list[str]:
    """Return the culture codes that have a language definition."""
    return sorted(_LANGUAGES)


def get_language(code: str) -> Language:
    """Look up a culture by code.

    Args:
        code: A culture code such as ``'en-US'`` or ``'de-DE'``.

    Returns:
        The matching :class:`Language`.

    Raises:
        UnknownLanguageError: If no culture is registered under *code*.
    """
    try:
        return _LANGUAGES[code]
    except KeyError:
        raise UnknownLanguageError(f"Unknown language: {code!r}") from None

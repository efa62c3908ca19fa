"""Format numbers with numbro-style patterns and parse them back.

A pattern describes how a number is shown, e.g. ``0,0`` (grouped integer),
``0,0[.00]`` (up to two decimals, dropped when zero), ``$0,0.00`` (currency),
``0.0a`` (abbreviated) or ``0%`` (percentage).  Both directions are total:
:func:`format_value` and :func:`unformat` never raise for values inside their
domain and fall back to the empty string / ``None`` instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from functools import lru_cache

from babel.numbers import NumberFormatError, format_decimal, parse_decimal

from numeral_input.errors import FormatSpecError
from numeral_input.languages import DEFAULT_LANGUAGE, Language, get_language

# Integer with thousand separators.
DEFAULT_FORMAT = "0,0"

NumericValue = Decimal | int | float | None

_PATTERN_RE = re.compile(
    r"""
    ^(?P<open>\()?
    (?P<lead_sign>[+-])?
    (?P<lead_currency>\$\s?)?
    0(?P<thousands>,0+)?
    (?:
        \[\.(?P<all_optional>0+)\]
      | \.(?P<fixed>0*)(?:\[(?P<optional>0+)\])?
    )?
    (?P<abbreviate>\s?a)?
    (?P<percent>\s?%)?
    (?P<trail_currency>\s?\$)?
    (?P<trail_sign>[+-])?
    (?P<close>\))?$
    """,
    re.VERBOSE,
)

_ABBREVIATION_POWERS: tuple[tuple[str, int], ...] = (
    ("thousand", 3),
    ("million", 6),
    ("billion", 9),
    ("trillion", 12),
)

_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class NumeralFormat:
    """A compiled number pattern.

    The ``*_space`` fields hold the separator written between the number and
    the decoration (``''`` or ``' '``); ``None`` means the decoration is off.
    """

    pattern: str
    thousands: bool = False
    min_decimals: int = 0
    max_decimals: int = 0
    optional_decimals: bool = False
    force_sign: bool = False
    sign_trailing: bool = False
    parentheses: bool = False
    abbreviation_space: str | None = None
    percent_space: str | None = None
    currency_position: str | None = None
    currency_space: str = ""


@lru_cache(maxsize=128)
def compile_format(number_format: str) -> NumeralFormat:
    """Parse a pattern string into a :class:`NumeralFormat`.

    Args:
        number_format: The pattern, e.g. ``'0,0.00'``.

    Returns:
        The compiled format.

    Raises:
        FormatSpecError: If the pattern is not understood.
    """
    match = _PATTERN_RE.match(number_format)
    if match is None:
        raise FormatSpecError(f"Unrecognised number format: {number_format!r}")

    parts = match.groupdict()
    if bool(parts["open"]) != bool(parts["close"]):
        raise FormatSpecError(f"Unbalanced parentheses in number format: {number_format!r}")
    if parts["lead_sign"] and parts["trail_sign"]:
        raise FormatSpecError(f"Sign given twice in number format: {number_format!r}")
    if parts["lead_currency"] and parts["trail_currency"]:
        raise FormatSpecError(f"Currency given twice in number format: {number_format!r}")

    if parts["all_optional"]:
        min_decimals = 0
        max_decimals = len(parts["all_optional"])
    else:
        min_decimals = len(parts["fixed"] or "")
        max_decimals = min_decimals + len(parts["optional"] or "")

    sign = parts["lead_sign"] or parts["trail_sign"] or ""
    currency_position = None
    currency_space = ""
    if parts["lead_currency"]:
        currency_position = "lead"
        currency_space = parts["lead_currency"][1:]
    elif parts["trail_currency"]:
        currency_position = "trail"
        currency_space = parts["trail_currency"][:-1]

    return NumeralFormat(
        pattern=number_format,
        thousands=parts["thousands"] is not None,
        min_decimals=min_decimals,
        max_decimals=max_decimals,
        optional_decimals=parts["all_optional"] is not None,
        force_sign=sign == "+",
        sign_trailing=bool(parts["trail_sign"]),
        parentheses=parts["open"] is not None,
        abbreviation_space=_decoration_space(parts["abbreviate"]),
        percent_space=_decoration_space(parts["percent"]),
        currency_position=currency_position,
        currency_space=currency_space,
    )


def _decoration_space(token: str | None) -> str | None:
    """Return the whitespace in front of a one-character token, or None if absent."""
    if token is None:
        return None
    return token[:-1]


def _to_decimal(value: Decimal | int | float) -> Decimal | None:
    """Convert a number to Decimal, returning None for NaN and infinities."""
    number = value if isinstance(value, Decimal) else Decimal(str(value))
    return number if number.is_finite() else None


def _round(number: Decimal, places: int) -> Decimal:
    """Round half-up to *places* decimals without hitting the context precision."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + places + 2)
        return number.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _abbreviate(number: Decimal, places: int, language: Language) -> tuple[Decimal, str]:
    """Scale *number* to the largest power of a thousand it reaches and round it.

    When rounding carries the scaled number up to a thousand (``999.96`` at
    one decimal) the next abbreviation is used instead, so ``1.0k`` is shown
    rather than ``1000.0``.
    """
    magnitude = abs(number)
    index = -1
    for position, (_, power) in enumerate(_ABBREVIATION_POWERS):
        if magnitude >= Decimal(10) ** power:
            index = position

    def scaled(position: int) -> Decimal:
        power = _ABBREVIATION_POWERS[position][1] if position >= 0 else 0
        return _round(number.scaleb(-power), places)

    rounded = scaled(index)
    if abs(rounded) >= 1000 and index + 1 < len(_ABBREVIATION_POWERS):
        index += 1
        rounded = scaled(index)
    if index < 0:
        return rounded, ""
    return rounded, language.abbreviations[_ABBREVIATION_POWERS[index][0]]


def _cldr_pattern(spec: NumeralFormat, whole: bool) -> str:
    """Translate the digit part of a numbro pattern into a CLDR number pattern.

    ``0,0[.00]`` becomes ``#,##0.00`` (or ``#,##0`` for whole numbers, since
    optional decimals are shown all or nothing) and ``0.0[00]`` becomes
    ``0.0##``.
    """
    integer = "#,##0" if spec.thousands else "0"
    if spec.optional_decimals:
        fraction = "" if whole else "0" * spec.max_decimals
    else:
        fraction = "0" * spec.min_decimals + "#" * (spec.max_decimals - spec.min_decimals)
    return f"{integer}.{fraction}" if fraction else integer


def _render_digits(magnitude: Decimal, spec: NumeralFormat, language: Language) -> str:
    """Render a rounded, non-negative Decimal with the culture's separators."""
    pattern = _cldr_pattern(spec, magnitude == magnitude.to_integral_value())
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, magnitude.adjusted() + spec.max_decimals + 2)
        ctx.rounding = ROUND_HALF_UP
        return format_decimal(magnitude, format=pattern, locale=language.locale)


def format_value(
    value: NumericValue,
    number_format: str = DEFAULT_FORMAT,
    language: str = DEFAULT_LANGUAGE,
) -> str:
    """Format a number for display.

    Args:
        value: The number to format, or None for an empty field.
        number_format: A numbro-style pattern.
        language: Culture code supplying delimiters and symbols.

    Returns:
        The formatted string; always ``''`` when *value* is None.

    Raises:
        FormatSpecError: If *number_format* is not a valid pattern.
        UnknownLanguageError: If *language* is not a known culture.
    """
    spec = compile_format(number_format or DEFAULT_FORMAT)
    lang = get_language(language)
    if value is None:
        return ""
    number = _to_decimal(value)
    if number is None:
        return ""

    if spec.percent_space is not None:
        number *= 100
    suffix = ""
    if spec.abbreviation_space is not None:
        rounded, abbreviation = _abbreviate(number, spec.max_decimals, lang)
        if abbreviation:
            suffix = spec.abbreviation_space + abbreviation
    else:
        rounded = _round(number, spec.max_decimals)
    if spec.percent_space is not None:
        suffix += spec.percent_space + "%"

    negative = rounded < 0
    body = _render_digits(abs(rounded), spec, lang) + suffix

    if spec.currency_position == "lead":
        body = f"{lang.currency_symbol}{spec.currency_space}{body}"
    elif spec.currency_position == "trail":
        body = f"{body}{spec.currency_space}{lang.currency_symbol}"

    if negative and spec.parentheses:
        return f"({body})"
    if negative:
        sign = "-"
    elif spec.force_sign:
        sign = "+"
    else:
        sign = ""
    return body + sign if spec.sign_trailing else sign + body


def _abbreviation_scale(text: str, language: Language) -> int:
    """Return the power of ten implied by an abbreviation right after the digits."""
    by_length = sorted(
        _ABBREVIATION_POWERS,
        key=lambda item: len(language.abbreviations[item[0]]),
        reverse=True,
    )
    for name, power in by_length:
        suffix = re.escape(language.abbreviations[name])
        if re.search(rf"\d\s?{suffix}(?![^\W\d_])", text):
            return power
    return 0


def unformat(text: str | None, language: str = DEFAULT_LANGUAGE) -> Decimal | None:
    """Parse display text back into a number.

    Decoration (currency symbols, group separators, stray letters) is
    ignored, so partial input still yields a best-effort value:
    ``'1,000.5x'`` parses as ``1000.5`` while ``'-'`` parses as None.

    Args:
        text: The text to parse.
        language: Culture code supplying delimiters and abbreviations.

    Returns:
        The parsed Decimal, or None when the text holds no number.
    """
    if not text or not text.strip():
        return None
    lang = get_language(language)
    stripped = text.strip()

    negative = stripped.count("-") % 2 == 1 or ("(" in stripped and ")" in stripped)
    scale = _abbreviation_scale(stripped, lang)
    if "%" in stripped:
        scale -= 2

    # Group separators, symbols and stray letters all go; only digits and
    # the culture's decimal separator reach the parser.
    cleaned = stripped.replace(lang.currency_symbol, "")
    cleaned = "".join(ch for ch in cleaned if ch in _DIGITS or ch == lang.decimal)
    if not _DIGITS.intersection(cleaned) or cleaned.count(lang.decimal) > 1:
        return None
    try:
        number = parse_decimal(cleaned, locale=lang.locale)
    except NumberFormatError:
        return None

    number = number.scaleb(scale)
    if negative and number:
        return -number
    return number


def to_edit_text(value: NumericValue, language: str = DEFAULT_LANGUAGE) -> str:
    """Render a number as plain editable text without grouping or decoration.

    Args:
        value: The number, or None.
        language: Culture code whose decimal delimiter is used.

    Returns:
        e.g. ``'1000'`` or ``'3.1427'``; ``''`` for None.
    """
    lang = get_language(language)
    if value is None:
        return ""
    number = _to_decimal(value)
    if number is None:
        return ""
    if number == 0:
        return "0"
    text = f"{number.normalize():f}"
    return text.replace(".", lang.decimal)

"""Configuration for numeral-input.

Settings live in ~/.config/numeral-input/config.toml::

    format = "0,0[.00]"
    language = "de-DE"

Command-line arguments of the demo application take priority over the file,
which takes priority over the built-in defaults.
"""

from __future__ import annotations

import argparse
import sys
from decimal import Decimal
from pathlib import Path

from numeral_input.errors import NumeralError
from numeral_input.languages import DEFAULT_LANGUAGE, available_languages, get_language
from numeral_input.numeral import DEFAULT_FORMAT, compile_format, unformat

_CONFIG_PATH = Path.home() / ".config" / "numeral-input" / "config.toml"
_SETTINGS = ("format", "language")


def _load_config_dict() -> dict:
    """Load the full config.toml as a dict, or return empty dict on failure."""
    if not _CONFIG_PATH.exists():
        return {}
    try:
        if sys.version_info >= (3, 11):
            import tomllib
        else:
            import tomli as tomllib

        with open(_CONFIG_PATH, "rb") as f:
            return tomllib.load(f)
    except Exception:
        return {}


def _save_config_dict(data: dict) -> None:
    """Write the settings back to config.toml as flat ``key = "value"`` lines."""
    _CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    lines = []
    for key, value in data.items():
        escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
        lines.append(f'{key} = "{escaped}"')
    _CONFIG_PATH.write_text("\n".join(lines) + "\n", encoding="utf-8")


def load_default_format() -> str:
    """Return the configured number format.

    Returns:
        The ``format`` value from config.toml, or ``DEFAULT_FORMAT`` when it
        is missing or not a valid pattern.
    """
    value = _load_config_dict().get("format")
    if not value:
        return DEFAULT_FORMAT
    try:
        compile_format(str(value))
    except NumeralError:
        return DEFAULT_FORMAT
    return str(value)


def load_language() -> str:
    """Return the configured culture code.

    Returns:
        The ``language`` value from config.toml, or ``DEFAULT_LANGUAGE`` when
        it is missing or unknown.
    """
    value = _load_config_dict().get("language")
    if not value:
        return DEFAULT_LANGUAGE
    try:
        get_language(str(value))
    except NumeralError:
        return DEFAULT_LANGUAGE
    return str(value)


def save_format(number_format: str) -> None:
    """Persist the default number format to config.toml.

    Args:
        number_format: Pattern to save (e.g. ``'0,0.00'``).
    """
    data = {key: value for key, value in _load_config_dict().items() if key in _SETTINGS}
    data["format"] = number_format
    _save_config_dict(data)


def _number_arg(text: str) -> Decimal | None:
    """argparse type for the initial value; an empty string means no value."""
    if not text.strip():
        return None
    number = unformat(text)
    if number is None:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")
    return number


def _format_arg(text: str) -> str:
    """argparse type that rejects unparseable patterns."""
    try:
        compile_format(text)
    except NumeralError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return text


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse. Defaults to sys.argv[1:].

    Returns:
        Parsed namespace with 'value', 'format' and 'language' attributes.
    """
    parser = argparse.ArgumentParser(
        prog="numeral-input",
        description="Try out the formatted number input in the terminal.",
    )
    parser.add_argument(
        "value",
        nargs="?",
        type=_number_arg,
        default=None,
        help="Initial number (e.g. 1000 or '1,000.50'). Omit for an empty field.",
    )
    parser.add_argument(
        "-f",
        "--format",
        type=_format_arg,
        default=None,
        help="Number format pattern, e.g. '0,0[.00]'. Defaults to config.toml or '0,0'.",
    )
    parser.add_argument(
        "-l",
        "--language",
        choices=available_languages(),
        default=None,
        help="Culture used for separators and currency symbols.",
    )
    return parser.parse_args(argv)

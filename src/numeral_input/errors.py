"""Custom exceptions for number formats and cultures."""


class NumeralError(Exception):
    """Base class for errors raised by numeral_input."""


class FormatSpecError(NumeralError, ValueError):
    """Raised when a number format pattern cannot be parsed."""


class UnknownLanguageError(NumeralError, ValueError):
    """Raised when a culture code has no language definition."""

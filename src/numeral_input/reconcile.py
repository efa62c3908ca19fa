"""Reconciliation between an external number, the edit buffer and its display.

The field has two modes.  While unfocused the buffer always holds the
canonical formatted text of the number it represents; while focused it holds
exactly what the user typed, however incomplete.  :func:`reduce` computes
the next :class:`InputState` for an event together with the notifications
the owner has to deliver once that state is committed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any

from numeral_input.languages import DEFAULT_LANGUAGE
from numeral_input.numeral import (
    DEFAULT_FORMAT,
    NumericValue,
    compile_format,
    format_value,
    to_edit_text,
    unformat,
)


@dataclass(frozen=True)
class InputState:
    """Focus flag and text buffer of a number field, plus how to format it."""

    focused: bool = False
    raw_text: str = ""
    number_format: str = DEFAULT_FORMAT
    language: str = DEFAULT_LANGUAGE


# Events


@dataclass(frozen=True)
class ExternalUpdate:
    """The owner supplied a new number and, optionally, a new format."""

    value: NumericValue
    number_format: str | None = None


@dataclass(frozen=True)
class FocusGained:
    event: Any = None


@dataclass(frozen=True)
class TextChanged:
    """The text in the field was edited."""

    text: str
    event: Any = None


@dataclass(frozen=True)
class FocusLost:
    event: Any = None


Event = ExternalUpdate | FocusGained | TextChanged | FocusLost


# Effects


@dataclass(frozen=True)
class NotifyChange:
    """Report the number parsed from the latest edit to the owner."""

    value: Decimal | None
    event: Any = None


@dataclass(frozen=True)
class NotifyFocus:
    event: Any = None


@dataclass(frozen=True)
class NotifyBlur:
    event: Any = None


Effect = NotifyChange | NotifyFocus | NotifyBlur


@dataclass(frozen=True)
class Transition:
    """The state after an event and the effects to run, in order, afterwards."""

    state: InputState
    effects: tuple[Effect, ...] = ()


def initialize(
    value: NumericValue,
    number_format: str | None = None,
    language: str | None = None,
) -> InputState:
    """Create the state of a freshly mounted, unfocused field.

    Args:
        value: The initial number, or None for an empty field.
        number_format: Pattern to display with; defaults to ``DEFAULT_FORMAT``.
        language: Culture code; defaults to ``DEFAULT_LANGUAGE``.

    Raises:
        FormatSpecError: If *number_format* is not a valid pattern.
        UnknownLanguageError: If *language* is not a known culture.
    """
    number_format = number_format or DEFAULT_FORMAT
    language = language or DEFAULT_LANGUAGE
    return InputState(
        focused=False,
        raw_text=format_value(value, number_format, language),
        number_format=number_format,
        language=language,
    )


def current_value(state: InputState) -> Decimal | None:
    """Return the number the field currently represents."""
    return unformat(state.raw_text, state.language)


def _canonical(text: str, state: InputState) -> str:
    return format_value(unformat(text, state.language), state.number_format, state.language)


def display_value(state: InputState) -> str:
    """Return the text to show: the raw buffer while editing, else its formatted form."""
    if state.focused:
        return state.raw_text or ""
    return _canonical(state.raw_text, state) or ""


def retain_event(event: Any) -> Any:
    """Detach *event* from its dispatcher if it supports that, then return it.

    Some event objects are only valid while being dispatched; those expose a
    ``persist()`` method which must run before the event is handed on.
    """
    persist = getattr(event, "persist", None)
    if callable(persist):
        persist()
    return event


def reduce(state: InputState, event: Event) -> Transition:
    """Apply one event to the field state.

    Args:
        state: The current state.
        event: The event to apply.

    Returns:
        The new state and the notifications to deliver after committing it.

    Raises:
        FormatSpecError: If an :class:`ExternalUpdate` carries an invalid pattern.
        TypeError: If *event* is not a known event type.
    """
    match event:
        case ExternalUpdate(value=value, number_format=number_format):
            number_format = number_format or state.number_format or DEFAULT_FORMAT
            if state.focused:
                # Text being typed wins over the owner; only remember the format.
                compile_format(number_format)
                return Transition(replace(state, number_format=number_format))
            return Transition(
                replace(
                    state,
                    raw_text=format_value(value, number_format, state.language),
                    number_format=number_format,
                )
            )

        case FocusGained(event=source):
            if state.focused:
                return Transition(state, (NotifyFocus(source),))
            edit_text = to_edit_text(current_value(state), state.language)
            return Transition(
                replace(state, focused=True, raw_text=edit_text),
                (NotifyFocus(source),),
            )

        case TextChanged(text=text, event=source):
            raw_text = text if state.focused else _canonical(text, state)
            return Transition(
                replace(state, raw_text=raw_text),
                (NotifyChange(unformat(text, state.language), source),),
            )

        case FocusLost(event=source):
            return Transition(
                replace(state, focused=False, raw_text=_canonical(state.raw_text, state)),
                (NotifyBlur(source),),
            )

    raise TypeError(f"Unsupported event: {event!r}")

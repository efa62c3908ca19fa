"""Number input widget that shows a formatted number and edits it raw."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any

from textual.events import Blur, Focus
from textual.message import Message
from textual.widgets import Input

from numeral_input.numeral import NumericValue
from numeral_input.reconcile import (
    Event,
    ExternalUpdate,
    FocusGained,
    FocusLost,
    NotifyBlur,
    NotifyChange,
    NotifyFocus,
    TextChanged,
    current_value,
    display_value,
    initialize,
    reduce,
    retain_event,
)

ChangeCallback = Callable[[Decimal | None, Any], Any]
EventCallback = Callable[[Any], Any]


def _ignore(*args: Any) -> None:
    """Callback used when the owner does not supply one."""


class NumberInput(Input):
    """An Input bound to a number rather than to a string.

    While the field is not focused it shows the number formatted with
    ``number_format`` (e.g. ``1,000``).  On focus the text switches to the
    plain form (``1000``) and every keystroke is kept verbatim, reporting the
    best-effort parsed number through ``on_change`` and a
    :class:`NumberInput.NumberChanged` message.  On blur the text snaps back
    to the formatted form.  Numbers supplied by the owner while the user is
    typing are ignored.

    Any keyword argument not listed below is passed to :class:`Input`
    unchanged, except ``value``: the text is always derived from ``number``.
    """

    class NumberChanged(Message):
        """Posted when the user edits the field."""

        def __init__(self, number_input: NumberInput, number: Decimal | None, text: str) -> None:
            super().__init__()
            self.number_input = number_input
            self.number = number
            self.text = text

        @property
        def control(self) -> NumberInput:
            """Alias for :attr:`number_input`."""
            return self.number_input

    def __init__(
        self,
        number: NumericValue = None,
        number_format: str | None = None,
        language: str | None = None,
        *,
        on_change: ChangeCallback | None = None,
        on_focus: EventCallback | None = None,
        on_blur: EventCallback | None = None,
        **kwargs,
    ) -> None:
        """Initialize the field.

        Args:
            number: Initial number, or None for an empty field.
            number_format: numbro-style display pattern; defaults to ``0,0``.
            language: Culture code for delimiters; defaults to ``en-US``.
            on_change: Called with ``(number, message)`` after each edit.
            on_focus: Called with the Focus event once the field is focused.
            on_blur: Called with the Blur event once the field is blurred.
            **kwargs: Passed through to :class:`Input`.

        Raises:
            FormatSpecError: If *number_format* is not a valid pattern.
            UnknownLanguageError: If *language* is not a known culture.
        """
        self._reconcile_state = initialize(number, number_format, language)
        self._last_number = number
        self._change_callback = on_change or _ignore
        self._focus_callback = on_focus or _ignore
        self._blur_callback = on_blur or _ignore

        kwargs["value"] = display_value(self._reconcile_state)
        self._writing_display = True
        try:
            super().__init__(**kwargs)
        finally:
            self._writing_display = False

    @property
    def number(self) -> Decimal | None:
        """The number the field currently represents, or None when empty."""
        return current_value(self._reconcile_state)

    @number.setter
    def number(self, value: NumericValue) -> None:
        self.update_number(value)

    @property
    def number_format(self) -> str:
        """The display pattern; assigning one reformats the field."""
        return self._reconcile_state.number_format

    @number_format.setter
    def number_format(self, number_format: str) -> None:
        self._dispatch(ExternalUpdate(self._last_number, number_format))

    @property
    def language(self) -> str:
        """The culture code used for delimiters and symbols."""
        return self._reconcile_state.language

    @property
    def is_editing(self) -> bool:
        """Whether the field holds raw text being typed."""
        return self._reconcile_state.focused

    def update_number(self, value: NumericValue, number_format: str | None = None) -> None:
        """Replace the number from outside.

        Ignored while the field is focused, so text being typed is never
        overwritten; a new *number_format* is still remembered.

        Args:
            value: The new number, or None to empty the field.
            number_format: Optional new display pattern.
        """
        if not self._reconcile_state.focused:
            self._last_number = value
        self._dispatch(ExternalUpdate(value, number_format))

    def _dispatch(self, event: Event) -> None:
        """Commit the transition for *event*, refresh the text, then run its effects."""
        transition = reduce(self._reconcile_state, event)
        self._reconcile_state = transition.state
        if self.is_mounted:
            self.log.debug(
                "number input transition",
                event=type(event).__name__,
                focused=transition.state.focused,
                raw_text=transition.state.raw_text,
            )
        self._write_display()

        for effect in transition.effects:
            match effect:
                case NotifyChange(value=number):
                    self._last_number = number
                    message = self.NumberChanged(self, number, self._reconcile_state.raw_text)
                    self._change_callback(number, message)
                    self.post_message(message)
                case NotifyFocus(event=source):
                    self._focus_callback(source)
                case NotifyBlur(event=source):
                    self._blur_callback(source)

    def _write_display(self) -> None:
        """Show the derived display text without treating it as user input."""
        text = display_value(self._reconcile_state)
        if text == self.value:
            return
        self._writing_display = True
        try:
            self.value = text
        finally:
            self._writing_display = False

    def watch_value(self, value: str) -> None:
        """Run user edits through the reconciliation core."""
        if self._writing_display:
            return
        self._dispatch(TextChanged(value))

    def _on_focus(self, event: Focus) -> None:
        """Switch to the plain edit form when the field gains focus."""
        self._dispatch(FocusGained(retain_event(event)))

    def _on_blur(self, event: Blur) -> None:
        """Reformat the typed text when the field loses focus."""
        self._dispatch(FocusLost(retain_event(event)))

"""Demo Textual application for the NumberInput widget."""

from __future__ import annotations

from decimal import Decimal

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.widgets import Input, Label, Static

from numeral_input.config import save_format
from numeral_input.numeral import DEFAULT_FORMAT, NumericValue
from numeral_input.widgets.number_input import NumberInput

FORMAT_PRESETS: tuple[str, ...] = (
    "0,0",
    "0,0[.00]",
    "$0,0.00",
    "0.0a",
    "0%",
)

_FOOTER_TEXT = "\\[ctrl+↑/↓] Step value  \\[f2] Next format  \\[tab] Move focus  \\[ctrl+q] Quit"


def describe_number(number: Decimal | None) -> str:
    """Render a reported number for the status bar."""
    if number is None:
        return "empty"
    return str(number)


class NumeralInputApp(App):
    """A single formatted number field next to a plain input to move focus to."""

    TITLE = "numeral-input"
    CSS_PATH = "styles/app.tcss"
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("ctrl+up", "step(1)", "Increase", show=False),
        Binding("ctrl+down", "step(-1)", "Decrease", show=False),
        Binding("f2", "cycle_format", "Format", show=False),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        number: NumericValue = None,
        number_format: str = DEFAULT_FORMAT,
        language: str | None = None,
    ) -> None:
        """Initialize the app.

        Args:
            number: Initial value of the number field.
            number_format: Display pattern of the number field.
            language: Culture code of the number field.
        """
        super().__init__()
        self.initial_number = number
        self.initial_format = number_format
        self.culture = language
        self.last_event = "-"
        self.status_text = ""

    def compose(self) -> ComposeResult:
        """Create the app layout."""
        with Vertical(id="form"):
            yield Static("Number input", id="form-title")
            with Horizontal(classes="form-field"):
                yield Label("Number:")
                yield NumberInput(
                    self.initial_number,
                    self.initial_format,
                    self.culture,
                    on_focus=self._number_focused,
                    on_blur=self._number_blurred,
                    placeholder="empty",
                    id="number",
                )
            with Horizontal(classes="form-field"):
                yield Label("Notes:")
                yield Input(placeholder="Tab here to leave the number field", id="other")
            yield Static(id="status-bar", markup=False)
        yield Static(_FOOTER_TEXT, id="footer-bar")

    def on_mount(self) -> None:
        """Show the initial value in the status bar."""
        self._refresh_status()

    def _number_focused(self, event) -> None:
        self.last_event = "focus"
        self._refresh_status()

    def _number_blurred(self, event) -> None:
        self.last_event = "blur"
        self._refresh_status()

    def on_number_input_number_changed(self, message: NumberInput.NumberChanged) -> None:
        """Report every edit of the number field."""
        self.last_event = f"typed {message.text!r}"
        self._refresh_status()

    def _refresh_status(self) -> None:
        """Rewrite the status bar from the number field's current state."""
        try:
            field = self.query_one("#number", NumberInput)
            status = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        self.status_text = (
            f"value: {describe_number(field.number)}   "
            f"format: {field.number_format}   "
            f"last: {self.last_event}"
        )
        status.update(self.status_text)

    def action_step(self, delta: int) -> None:
        """Push a new number into the field from outside."""
        field = self.query_one("#number", NumberInput)
        if field.is_editing:
            self.notify("Field is being edited; external update ignored", timeout=3)
            return
        current = field.number if field.number is not None else Decimal(0)
        field.number = current + delta
        self.last_event = f"set {describe_number(field.number)}"
        self._refresh_status()

    def action_cycle_format(self) -> None:
        """Switch the field to the next preset format and remember it."""
        field = self.query_one("#number", NumberInput)
        try:
            index = FORMAT_PRESETS.index(field.number_format)
        except ValueError:
            index = -1
        number_format = FORMAT_PRESETS[(index + 1) % len(FORMAT_PRESETS)]
        field.number_format = number_format
        save_format(number_format)
        self.last_event = f"format {number_format}"
        self._refresh_status()

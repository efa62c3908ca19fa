"""Entry point for numeral-input."""

from numeral_input.app import NumeralInputApp
from numeral_input.config import load_default_format, load_language, parse_args


def main() -> None:
    """Run the numeral-input demo application."""
    args = parse_args()
    app = NumeralInputApp(
        number=args.value,
        number_format=args.format or load_default_format(),
        language=args.language or load_language(),
    )
    app.run()


if __name__ == "__main__":
    main()

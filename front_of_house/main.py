"""Entry point for the front-of-house Textual app."""

from __future__ import annotations

from front_of_house.foh_app import FrontOfHouseApp


def main() -> None:
    """Run the Textual application."""
    FrontOfHouseApp().run()


if __name__ == "__main__":
    main()

"""Standard output price display."""

import sys
from typing import IO, Optional

from ..config.defaults import DisplayParams
from ..models import DisplayState

CLEAR_SCREEN = "\033[2J\033[H"
UNAVAILABLE_MESSAGE = "Unable to retrieve price."


class ConsoleRenderer:
    """Renders DisplayState frames to a text stream."""

    def __init__(self, config: Optional[DisplayParams] = None, stream: Optional[IO[str]] = None,
                 quit_command: str = "q"):
        self.config = config or DisplayParams()
        self.stream = stream if stream is not None else sys.stdout
        self.quit_command = quit_command

    def render(self, state: DisplayState) -> None:
        """Draw the full frame for a fresh reading."""
        if self.config.clear_screen and self.stream.isatty():
            self.stream.write(CLEAR_SCREEN)

        print(self.format_reading(state), file=self.stream)
        print(
            f"Type '{self.quit_command}' then Enter, or press Ctrl+C, to quit.",
            file=self.stream
        )
        self.render_progress(state)

    def render_progress(self, state: DisplayState) -> None:
        """Redraw the single progress line in place."""
        self.stream.write("\r" + self.format_progress(state))
        self.stream.flush()

    def farewell(self) -> None:
        print("\nStopped. Goodbye!", file=self.stream, flush=True)

    def format_reading(self, state: DisplayState) -> str:
        reading = state.reading
        if reading.valid:
            return (
                f"{self.config.asset_label} price: "
                f"{self.config.currency_symbol}{reading.value:.2f} - {state.updated_at}"
            )
        return f"{UNAVAILABLE_MESSAGE} Last attempt: {state.updated_at}"

    def format_progress(self, state: DisplayState) -> str:
        width = self.config.progress_width
        filled = int(round(state.progress_fraction() * width))
        bar = "#" * filled + "." * (width - filled)
        return f"Next update in {state.seconds_remaining:>3}s [{bar}]"

"""Console progress display backed by tqdm."""

import sys
from typing import Optional, TextIO

from tqdm import tqdm


class TqdmProgressReporter:
    """Progress bar plus plain lines written around it."""

    def __init__(self, stream: Optional[TextIO] = None, disable: Optional[bool] = None):
        self._stream = stream or sys.stdout
        # None lets tqdm hide the bar when the stream is not a terminal
        self._disable = disable
        self._bar: Optional[tqdm] = None

    def start(self, total: int) -> None:
        self._bar = tqdm(
            total=total,
            file=self._stream,
            unit="image",
            leave=False,
            dynamic_ncols=True,
            disable=self._disable,
        )

    def processing(self, name: str) -> None:
        if self._bar is not None:
            self._bar.set_description_str(f"Processing image {name}...")

    def item_failed(self, name: str, message: str) -> None:
        self.line(f" Failed to process {name}.")
        self.line(message)

    def advance(self) -> None:
        if self._bar is not None:
            self._bar.update(1)

    def finish(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def line(self, text: str) -> None:
        tqdm.write(text, file=self._stream)

"""Streaming CSV log of the ball's path through the maze."""

import csv
from pathlib import Path
from typing import IO, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import FrameState


class CSVWriter:
    """
    One row per engine step, flushed as the session runs so an interrupted
    session still leaves a readable file.

        step,x,y,vx,vy,outcome
        1,52.0,50.0,120.0,0.0,in_progress
    """

    FIELDNAMES = ('step', 'x', 'y', 'vx', 'vy', 'outcome')

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.rows_written = 0
        self._handle: Optional[IO[str]] = None
        self._writer: Optional[csv.DictWriter] = None

    @property
    def closed(self) -> bool:
        return self._handle is None

    def open(self) -> None:
        """Create the file and its header. Reopening truncates."""
        if not self.closed:
            return
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.output_path.open('w', newline='')
        self._writer = csv.DictWriter(self._handle, fieldnames=self.FIELDNAMES)
        self._writer.writeheader()
        self.rows_written = 0

    def append(self, state: "FrameState") -> None:
        self.open()
        rows = state.to_csv_rows()
        self._writer.writerows(rows)
        self._handle.flush()
        self.rows_written += len(rows)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
        self._handle = None
        self._writer = None

    def __enter__(self) -> "CSVWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

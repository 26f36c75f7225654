"""
Plain-text report rendering.
Every line is padded to the configured width so values line up.
"""

import json
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, TextIO

from .. import __version__
from ..config import Config, RunConfiguration
from .base import CaseResult, format_seconds
from .metrics import MetricRecord
from .runner import RunResult


class Alignment(Enum):
    """Where the label sits inside its padded field."""
    LEFT = "left"       # pad on the right
    RIGHT = "right"     # pad on the left
    CENTER = "center"   # pad both sides, extra char on the right


def pad_text(text: str, length: int, pad: str = " ", align: Alignment = Alignment.LEFT) -> str:
    """
    Pad ``text`` to ``length`` characters. Never truncates.

    Args:
        text: Text to pad
        length: Target length; shorter or equal text is returned as is
        pad: Padding string (repeated and cut to fit)
        align: Alignment of ``text`` inside the field
    """
    if not pad:
        raise ValueError("Padding string must not be empty")

    missing = length - len(text)
    if missing <= 0:
        return text

    def fill(n: int) -> str:
        return (pad * n)[:n]

    if align is Alignment.RIGHT:
        return fill(missing) + text
    if align is Alignment.CENTER:
        left = missing // 2
        return fill(left) + text + fill(missing - left)
    return text + fill(missing)


class Reporter:
    """
    Render benchmark reports as aligned text lines.

    Supports:
        - key/value lines padded to a fixed width
        - separators and centered titles
        - environment header, per-case lines, metrics and totals
        - JSON export of a complete run

    Example:
        reporter = Reporter(width=55)
        reporter.line("core::math", "0.1234 s")
        # core::math................................. 0.1234 s
    """

    def __init__(
        self,
        width: int = 55,
        stream: Optional[TextIO] = None,
        newline: str = "\n",
    ):
        """
        Initialize reporter.

        Args:
            width: Line width in characters (positive)
            stream: Output sink (default: sys.stdout at write time)
            newline: Line terminator
        """
        if not isinstance(width, int) or width < 1:
            raise ValueError(f"Report width must be a positive integer, got {width!r}")

        self.width = width
        self._stream = stream
        self.newline = newline

    @classmethod
    def from_config(cls, config: RunConfiguration, stream: Optional[TextIO] = None) -> "Reporter":
        return cls(width=config.output_width, stream=stream)

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def line(
        self,
        label: str,
        trailer: str = "",
        pad: str = ".",
        align: Alignment = Alignment.LEFT,
    ) -> str:
        """
        Write one padded line and return it (without terminator).

        The label is padded to ``width - len(" " + trailer)``, clamped at
        zero, then the trailer is appended after a single space.
        """
        if trailer:
            trailer = f" {trailer}"

        length = max(0, self.width - len(trailer))
        text = pad_text(label, length, pad, align) + trailer
        self.stream.write(text + self.newline)
        return text

    def separator(self) -> str:
        return self.line("", "", "-")

    def title(self, text: str) -> str:
        return self.line(f" {text} ", "", "-", Alignment.CENTER)

    # ------------------------------------------------------------------
    # Report sections
    # ------------------------------------------------------------------

    def print_header(
        self,
        environment: Dict[str, str],
        config: RunConfiguration,
        database: Optional[Any] = None,
        generated_at: Optional[datetime] = None,
    ) -> None:
        """
        Print the banner, environment info and script configuration.

        Args:
            environment: Ordered label -> value pairs (see ``get_environment_info``)
            config: Resolved run configuration
            database: Database resource, for its status lines
            generated_at: Report timestamp (default: now)
        """
        generated_at = generated_at or datetime.now().astimezone()

        self.separator()
        self.line(Config.SCRIPT_NAME, "", " ", Alignment.CENTER)
        self.separator()

        self.line("Report generated at", generated_at.strftime("%d/%b/%Y %H:%M:%S %Z").strip())
        self.line("Script version", __version__)

        self.title("Python Info")
        for label, value in environment.items():
            self.line(label, value)

        self.title("Script config")
        self.line("Difficulty multiplier", f"{config.multiplier:g}x")

        if database is not None:
            if database.error:
                self.line("Mysql Error", database.error)
            self.line("Mysql", database.describe())
            if database.available:
                self.line("Mysql DB", database.handle.database)

        self.separator()

    def print_result(self, result: CaseResult) -> str:
        return self.line(result.key, result.value)

    def print_metrics(self, records: Iterable[MetricRecord]) -> None:
        records = list(records)
        if not records:
            return

        self.title("Throughput")
        for record in records:
            self.line(record.key, record.value)

    def print_summary(self, result: RunResult) -> None:
        """Print totals and the closing lines."""
        peak = result.peak_memory_mib

        self.separator()
        self.line("Total time", format_seconds(result.total_time))
        self.line("Peak memory usage", "N/A" if peak is None else f"{peak:.2f} MiB")
        self.separator()
        self.line("Thanks for using envbench", "", " ")

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def generate_json(self, result: RunResult, path: str) -> str:
        """
        Write the run as JSON.

        Args:
            result: Completed run
            path: Output file path

        Returns:
            Path to generated file
        """
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)

        return str(output_path)

import logging
import sys
import threading
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, TextIO, Tuple

from termcolor import colored
from tqdm import tqdm

from core.classifier import Outcome, ReportDecision, Severity
from core.templater import RequestSpec

SEVERITY_COLORS = {
    Severity.INFO: "cyan",
    Severity.SUCCESS: "green",
    Severity.REDIRECT: "yellow",
    Severity.CLIENT_ERROR: "red",
    Severity.SERVER_ERROR: "light_red",
    Severity.ERROR: "red",
}


@dataclass
class RunState:
    """Progress counters for one run. Only ever incremented."""
    total: int = 0
    completed: int = 0
    found: int = 0
    errors: int = 0


class Reporter:
    """
    Streams findings, request errors and progress to the terminal.

    Every line goes through one lock-guarded sink (tqdm.write), so concurrent
    callers never interleave output mid-line and the progress bar is redrawn
    below the printed lines.
    """
    def __init__(self, stream: Optional[TextIO] = None, use_color: bool = True,
                 show_progress: Optional[bool] = None):
        """
        Initializes the Reporter.

        Args:
            stream (TextIO, optional): Output stream. Defaults to sys.stdout.
            use_color (bool): Colour status codes and labels with termcolor.
            show_progress (bool, optional): Force the progress bar on or off.
                                            None lets tqdm decide (TTY only).
        """
        self.logger = logging.getLogger(__name__)
        self._stream = stream
        self.use_color = use_color
        self.show_progress = show_progress
        self.state = RunState()
        self._lock = threading.RLock()
        self._bar: Optional[tqdm] = None

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _color(self, text: str, color: Optional[str] = None, attrs: Optional[List[str]] = None) -> str:
        if not self.use_color:
            return text
        return colored(text, color, attrs=attrs)

    def _write(self, line: str):
        with self._lock:
            tqdm.write(line, file=self.stream)

    def banner(self, version: str):
        self._write(f"{self._color('BusterX', 'magenta')} (v{version}) "
                    f"{self._color('Directory buster tool', 'dark_grey')}")

    def settings(self, items: Sequence[Tuple[str, Any]]):
        """
        Prints the run settings, one '> key value' line each. List values are
        printed one per indented line below their key.
        """
        for key, value in items:
            label = self._color(f"{key: <10}", "green")
            if isinstance(value, (list, tuple)):
                self._write(f"{self._color('>', 'magenta')} {label}")
                for entry in value:
                    self._write(f"    {self._color('>', 'cyan')} {self._color(str(entry), 'red')}")
            else:
                self._write(f"{self._color('>', 'magenta')} {label} {value}")

    def start(self, total: int):
        """Resets the counters and opens the progress bar for `total` requests."""
        with self._lock:
            self.state = RunState(total=total)
            disable = None if self.show_progress is None else not self.show_progress
            self._bar = tqdm(
                total=total,
                desc="Busting",
                unit="req",
                leave=False,
                dynamic_ncols=True,
                file=self.stream,
                disable=disable,
            )
        self.logger.debug(f"Progress bar opened for {total} requests")

    def format_finding(self, spec: RequestSpec, outcome: Outcome, decision: ReportDecision) -> str:
        status = self._color(str(outcome.status_code), SEVERITY_COLORS[decision.severity])
        info = ""
        if spec.vhost:
            info = f" (VHost: {self._color(spec.vhost, 'light_magenta')})"
        return f"{self._color('>', 'magenta')} {self._color('Found:', 'cyan')} {spec.url}{info} ({status})"

    def format_error(self, spec: RequestSpec, outcome: Outcome) -> str:
        target = spec.url if not spec.vhost else f"{spec.url} (VHost: {spec.vhost})"
        return f"{self._color('Error:', 'red')} Request failed: {target} ({outcome.error})"

    def report(self, spec: RequestSpec, outcome: Outcome, decision: ReportDecision):
        """Prints the line for one classified outcome, if it is reportable."""
        if not decision.reportable:
            return
        with self._lock:
            if outcome.failed:
                self.state.errors += 1
                self._write(self.format_error(spec, outcome))
            else:
                self.state.found += 1
                self._write(self.format_finding(spec, outcome, decision))

    def tick(self):
        """Marks one more request as completed."""
        with self._lock:
            self.state.completed += 1
            if self._bar is not None:
                self._bar.update(1)

    def close(self):
        """Closes the progress bar, if one is open. Safe to call more than once."""
        with self._lock:
            if self._bar is not None:
                self._bar.close()
                self._bar = None

    def finish(self):
        """Clears the progress bar and prints the summary line."""
        self.close()
        with self._lock:
            state = self.state
            self._write(
                f"{self._color('Done', 'green')} {self._color('Busting completed', 'dark_grey')} "
                f"({state.found} found, {state.errors} errors, {state.completed}/{state.total} requests)"
            )

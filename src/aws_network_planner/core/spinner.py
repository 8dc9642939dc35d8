"""Spinner for blocking AWS discovery calls"""

import os
import sys
import threading
import time
from typing import Callable, TypeVar, Optional
from rich.console import Console
from rich.spinner import Spinner
from rich.live import Live

T = TypeVar("T")

DEFAULT_TIMEOUT = 120


def _truthy(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("true", "1", "yes")


def _should_use_spinner() -> bool:
    """Only animate on an interactive terminal outside tests and CI."""
    if "pytest" in sys.modules or os.environ.get("PYTEST_CURRENT_TEST"):
        return False
    if _truthy("NO_SPINNER"):
        return False
    if _truthy("FORCE_SPINNER"):
        return True
    if _truthy("CI"):
        return False
    return sys.stdout.isatty()


class _Call:
    """Runs a function on a daemon thread so an abandoned call never blocks exit."""

    def __init__(self, func: Callable[[], T]):
        self.func = func
        self.result: Optional[T] = None
        self.exception: Optional[BaseException] = None
        self.done = threading.Event()
        self.started = time.monotonic()
        threading.Thread(target=self._run, name="discovery", daemon=True).start()

    def _run(self):
        try:
            self.result = self.func()
        except Exception as e:
            self.exception = e
        finally:
            self.done.set()

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started

    def outcome(self) -> T:
        if self.exception is not None:
            raise self.exception
        return self.result


def run_with_spinner(
    func: Callable[[], T],
    message: str = "Loading...",
    timeout_seconds: int = DEFAULT_TIMEOUT,
    console: Optional[Console] = None,
) -> T:
    """Run ``func`` with a wall-clock limit, animating a spinner on a terminal.

    The limit applies whether or not the spinner is shown.

    Raises:
        TimeoutError: ``func`` did not finish within ``timeout_seconds``
    """
    call = _Call(func)
    expired = TimeoutError(f"{message} timed out after {timeout_seconds}s")

    if not _should_use_spinner():
        if not call.done.wait(max(timeout_seconds, 0)):
            raise expired
        return call.outcome()

    with Live(
        Spinner("dots", text=message, style="cyan"),
        console=console or Console(),
        refresh_per_second=10,
        transient=True,
    ) as live:
        while not call.done.wait(0.2):
            if call.elapsed > timeout_seconds:
                raise expired
            live.update(
                Spinner("dots", text=f"{message} ({call.elapsed:.1f}s)", style="cyan")
            )
    return call.outcome()

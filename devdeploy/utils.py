"""Console output and process helpers for devdeploy."""

import logging
import os
import shutil
import subprocess
import sys
from typing import NoReturn, Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

console = Console(highlight=False)
logger = logging.getLogger("devdeploy")

LEVEL_STYLES = {
    "info": ("blue", "i"),
    "success": ("green", "+"),
    "warning": ("yellow", "!"),
    "error": ("red", "x"),
    "step": ("cyan", ">"),
}


def configure_logging(level: str = "WARNING") -> None:
    """Route diagnostic logging through rich."""
    if logger.handlers:
        return
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.addHandler(RichHandler(console=console, show_path=False))


def log(msg: str, level: str = "info") -> None:
    """Print colored log message."""
    style, symbol = LEVEL_STYLES.get(level, ("blue", "*"))
    console.print(f"[{style}]\\[{symbol}][/{style}] {escape(msg)}")


def log_header(msg: str) -> None:
    """Print a header message."""
    console.print()
    console.print(f"[bold cyan]=== {msg} ===[/bold cyan]")
    console.print()


def log_subheader(msg: str) -> None:
    """Print a subheader message."""
    console.print(f"[bold]{msg}[/bold]")


def die(msg: str, code: int = 1) -> NoReturn:
    """Print error message and exit."""
    log(msg, "error")
    sys.exit(code)


def which(tool: str) -> Optional[str]:
    """Return the full path of a tool on the search path, if any."""
    return shutil.which(tool)


def run(
    cmd: Sequence[str],
    check: bool = True,
    timeout: Optional[int] = None,
) -> subprocess.CompletedProcess:
    """Run a command with its output streamed to the terminal.

    Args:
        cmd: Command and arguments
        check: Raise CalledProcessError on non-zero exit
        timeout: Timeout in seconds

    Returns:
        CompletedProcess instance
    """
    logger.debug("Running %s", " ".join(cmd))
    return subprocess.run(list(cmd), check=check, text=True, timeout=timeout)


def run_quiet(
    cmd: Sequence[str],
    timeout: Optional[int] = None,
) -> tuple[bool, str]:
    """Run command and return success status and trimmed output.

    A non-zero exit, a missing executable or a timeout is reported as a
    failure rather than raised.

    Args:
        cmd: Command and arguments
        timeout: Timeout in seconds

    Returns:
        Tuple of (success, output)
    """
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(
            list(cmd),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        return False, f"{cmd[0]}: command not found"
    except subprocess.TimeoutExpired:
        return False, "Command timed out"

    if result.returncode != 0:
        logger.debug("%s exited with %d", cmd[0], result.returncode)
        return False, (result.stderr or result.stdout or "").strip()
    return True, (result.stdout or "").strip()


def exec_command(cmd: Sequence[str]) -> NoReturn:
    """Replace the current process with a command."""
    logger.debug("Exec %s", " ".join(cmd))
    sys.stdout.flush()
    os.execvp(cmd[0], list(cmd))


class BackgroundWatch:
    """A background process whose output streams straight to the terminal.

    The watch is started explicitly and stopped explicitly (or by leaving
    the ``with`` block); stopping terminates the process.
    """

    def __init__(self, cmd: Sequence[str]) -> None:
        self._cmd = list(cmd)
        self._process: Optional[subprocess.Popen] = None

    @property
    def running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def start(self) -> "BackgroundWatch":
        """Start the watch process."""
        if self._process is None:
            logger.debug("Watching %s", " ".join(self._cmd))
            try:
                self._process = subprocess.Popen(self._cmd)
            except FileNotFoundError:
                log(f"Cannot watch, {self._cmd[0]} not found", "warning")
        return self

    def stop(self, timeout: int = 5) -> None:
        """Terminate the watch process. Safe to call more than once."""
        process, self._process = self._process, None
        if process is None or process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()

    def __enter__(self) -> "BackgroundWatch":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.stop()

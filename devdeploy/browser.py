"""Opening URLs in the user's browser."""

from typing import NoReturn, Optional, Sequence

from .config import BROWSER_COMMANDS
from .utils import die, exec_command, log, which


def find_opener(candidates: Sequence[str] = BROWSER_COMMANDS) -> Optional[str]:
    """Return the first available URL opener."""
    for candidate in candidates:
        if which(candidate):
            return candidate
    return None


def open_url(url: str) -> NoReturn:
    """Replace this process with a browser showing ``url``."""
    opener = find_opener()
    if opener is None:
        die(f"No command to open {url} found (tried {', '.join(BROWSER_COMMANDS)})")
    log(f"Opening {url}")
    exec_command([opener, url])

"""Flag parsing over a flat argument list.

Flags take either the ``--flag=value`` or the ``--flag value`` form. The
first matching occurrence wins and an absent flag yields ``None``.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .config import Settings


@dataclass(frozen=True)
class Option:
    """An accepted command line flag."""

    spellings: tuple[str, ...]
    help: str
    takes_value: bool = True

    @property
    def name(self) -> str:
        return self.spellings[0]


TAG = Option(("--tag", "-t"), "Version tag of the remote templates")
PROJECT = Option(("--project", "-p"), "Project to (re)create and deploy into")
YES = Option(("--yes", "-y"), "Recreate an existing project without asking", takes_value=False)
MEMORY = Option(("--memory",), "Memory for the cluster VM in MB")
CPUS = Option(("--cpus",), "Number of CPUs for the cluster VM")
DISK_SIZE = Option(("--disk-size",), "Disk size for the cluster VM")
OPENSHIFT_VERSION = Option(("--openshift-version",), "OpenShift version to start")
SHOW_LOGS = Option(("--show-logs", "--show-log"), "Verbose cluster startup logs", takes_value=False)

OPTIONS = [TAG, PROJECT, YES, MEMORY, CPUS, DISK_SIZE, OPENSHIFT_VERSION, SHOW_LOGS]


def has_flag(args: Sequence[str], *spellings: str) -> bool:
    """Check whether any of the spellings appears as an argument."""
    return any(arg in spellings for arg in args)


def flag_value(args: Sequence[str], *spellings: str) -> Optional[str]:
    """Get the value of the first occurrence of a flag.

    Args:
        args: Argument list
        spellings: Accepted spellings of the flag

    Returns:
        The value, or None if the flag is absent or is the last argument
        without a value
    """
    for index, arg in enumerate(args):
        for spelling in spellings:
            if arg.startswith(spelling + "="):
                return arg[len(spelling) + 1:]
            if arg == spelling:
                if index + 1 < len(args):
                    return args[index + 1]
                return None
    return None


def option_value(args: Sequence[str], option: Option) -> Optional[str]:
    return flag_value(args, *option.spellings)


def option_present(args: Sequence[str], option: Option) -> bool:
    return has_flag(args, *option.spellings)


@dataclass(frozen=True)
class ParsedOptions:
    """Resolved values of every option for one run."""

    tag: str | None
    project: str
    yes: bool
    memory: str
    cpus: str
    disk_size: str
    openshift_version: str
    show_logs: bool

    @classmethod
    def from_args(cls, args: Sequence[str], settings: Settings) -> "ParsedOptions":
        """Resolve options from arguments, falling back to settings."""
        args = tuple(args)

        def value(option: Option, default):
            found = option_value(args, option)
            return default if found is None else found

        return cls(
            tag=value(TAG, settings.tag),
            project=value(PROJECT, settings.project),
            yes=option_present(args, YES),
            memory=value(MEMORY, settings.memory),
            cpus=value(CPUS, settings.cpus),
            disk_size=value(DISK_SIZE, settings.disk_size),
            openshift_version=value(OPENSHIFT_VERSION, settings.openshift_version),
            show_logs=option_present(args, SHOW_LOGS),
        )


def options_help() -> str:
    """Render the option table for --help."""
    lines = []
    for option in OPTIONS:
        flags = ", ".join(option.spellings)
        if option.takes_value:
            flags += " VALUE"
        lines.append(f"  {flags:<32} {option.help}")
    return "\n".join(lines)

"""OpenShift project (namespace) management for devdeploy."""

import time
from typing import Callable

import click

from .utils import console, die, log, run_quiet

CONFIRM_ANSWERS = ("yes", "y")


def project_exists(name: str) -> bool:
    """Check if a project exists."""
    success, _ = run_quiet(["oc", "get", "project", name])
    return success


def confirm_recreate(name: str) -> bool:
    """Show what lives in the project and ask before deleting it.

    Only an exact ``yes`` or ``y`` counts as consent.
    """
    _, resources = run_quiet(["oc", "get", "all", "-n", name])
    log(f"Project '{name}' already exists and contains:", "warning")
    console.print(resources, markup=False)
    try:
        answer = click.prompt(
            f"Delete project '{name}' and everything in it? (yes/no)",
            default="",
            show_default=False,
        )
    except click.Abort:
        console.print()
        return False
    return answer in CONFIRM_ANSWERS


def delete_project(name: str) -> bool:
    log(f"Deleting project '{name}'...")
    success, output = run_quiet(["oc", "delete", "project", name])
    if not success:
        log(f"Failed to delete project '{name}': {output}", "warning")
    return success


def create_project(
    name: str,
    attempts: int = 10,
    delay: int = 10,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Create a project, retrying while the old one is still terminating.

    Args:
        name: Project name
        attempts: Maximum number of creation attempts
        delay: Seconds to wait between failed attempts
        sleep: Sleep function

    Returns:
        True if the project was created
    """
    for attempt in range(1, attempts + 1):
        success, output = run_quiet(["oc", "new-project", name])
        if success:
            log(f"Created project '{name}'", "success")
            return True
        log(f"Creating project '{name}' failed (attempt {attempt}/{attempts}): {output}", "warning")
        if attempt < attempts:
            sleep(delay)
    return False


def recreate_project(
    name: str,
    skip_confirmation: bool = False,
    attempts: int = 10,
    delay: int = 10,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Delete the project if it exists and create it again.

    Exits on an empty name, a declined confirmation or when every creation
    attempt failed.
    """
    if not name:
        die("No project given. Use --project <name>.")

    if project_exists(name):
        if not skip_confirmation and not confirm_recreate(name):
            die("Aborted")
        delete_project(name)

    if not create_project(name, attempts=attempts, delay=delay, sleep=sleep):
        die(f"Could not create project '{name}' after {attempts} attempts")

    run_quiet(["oc", "project", name])

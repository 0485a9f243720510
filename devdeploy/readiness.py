"""Waiting for deployment units to become available."""

import time
from typing import Callable, Sequence, TypeVar

from .config import DEPLOYMENTS
from .utils import BackgroundWatch, log, log_subheader, run_quiet

T = TypeVar("T")


def poll_until(
    fetch: Callable[[], T],
    predicate: Callable[[T], bool],
    interval: float,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Call ``fetch`` every ``interval`` seconds until ``predicate`` accepts its result.

    There is no deadline; this blocks until the condition holds.

    Returns:
        Number of times ``fetch`` was called
    """
    queries = 0
    while True:
        queries += 1
        if predicate(fetch()):
            return queries
        sleep(interval)


def available_replicas(unit: str) -> int:
    """Get the number of available replicas of a deployment config."""
    success, output = run_quiet([
        "oc", "get", "dc", unit,
        "-o", "jsonpath={.status.availableReplicas}",
    ])
    if not success:
        return 0
    try:
        return int(output)
    except ValueError:
        return 0


def wait_for_unit(
    unit: str,
    interval: float = 10,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Block until a unit has at least one available replica."""
    log(f"Waiting for {unit}...")
    queries = poll_until(
        lambda: available_replicas(unit),
        lambda replicas: replicas >= 1,
        interval,
        sleep,
    )
    log(f"{unit} is available", "success")
    return queries


def wait_for_deployments(
    units: Sequence[str] = DEPLOYMENTS,
    interval: float = 10,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Wait for every unit in turn while streaming pod status."""
    log_subheader("Waiting for deployments to become available...")
    with BackgroundWatch(["oc", "get", "pods", "-w"]):
        for unit in units:
            wait_for_unit(unit, interval, sleep)

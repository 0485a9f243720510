"""Local minishift cluster management for devdeploy."""

import os
import re
from typing import Optional

from .config import CLUSTER_CONTEXT, Settings
from .options import ParsedOptions
from .utils import die, log, log_subheader, run, run_quiet, which

EXPORT_LINE = re.compile(r'^export\s+([A-Za-z_][A-Za-z0-9_]*)="?(.*?)"?$')


def check_prerequisites() -> None:
    """Exit unless minishift is installed."""
    log_subheader("Checking prerequisites...")
    if which("minishift") is None:
        die("minishift not found on PATH. Please install minishift first.")
    log("minishift found", "success")


def is_running() -> bool:
    """Check if the minishift cluster is running."""
    success, output = run_quiet(["minishift", "status"])
    return success and "Running" in output


def start_cluster(options: ParsedOptions) -> bool:
    """Start minishift with the requested sizing.

    Args:
        options: Resolved command line options

    Returns:
        True if the cluster started
    """
    cmd = [
        "minishift", "start",
        "--memory", options.memory,
        "--cpus", options.cpus,
        "--disk-size", options.disk_size,
        "--openshift-version", options.openshift_version,
    ]
    if options.show_logs:
        cmd.extend(["--show-libmachine-logs", "-v5"])

    log(
        f"Starting minishift (memory {options.memory}, cpus {options.cpus}, "
        f"disk {options.disk_size}, {options.openshift_version})..."
    )
    result = run(cmd, check=False)
    if result.returncode != 0:
        log("minishift start failed", "warning")
        return False
    log("minishift started", "success")
    return True


def parse_env(output: str, environ: Optional[dict] = None) -> dict[str, str]:
    """Parse shell ``export`` lines into a mapping.

    ``$VAR`` references are expanded against ``environ``.

    Args:
        output: Output of ``minishift oc-env``
        environ: Environment used for expansion (defaults to os.environ)

    Returns:
        Dictionary of variables to set
    """
    environ = dict(os.environ if environ is None else environ)
    variables = {}
    for line in output.splitlines():
        match = EXPORT_LINE.match(line.strip())
        if not match:
            continue
        key, value = match.groups()
        value = re.sub(
            r"\$\{?([A-Za-z_][A-Za-z0-9_]*)\}?",
            lambda m: environ.get(m.group(1), ""),
            value,
        )
        variables[key] = value
        environ[key] = value
    return variables


def bind_environment() -> bool:
    """Load the minishift oc environment into this process."""
    success, output = run_quiet(["minishift", "oc-env"])
    if not success:
        log(f"Could not read minishift oc-env: {output}", "warning")
        return False
    os.environ.update(parse_env(output))
    return True


def switch_context(context: str = CLUSTER_CONTEXT) -> bool:
    """Switch oc to the local cluster context."""
    success, output = run_quiet(["oc", "config", "use-context", context])
    if success:
        log(f"oc now talks to the {context} cluster", "success")
    else:
        log(f"oc has no {context} context yet, is minishift up? ({output})", "warning")
    return success


def ensure_login(settings: Settings) -> bool:
    """Log in with the development credentials unless already logged in."""
    success, user = run_quiet(["oc", "whoami"])
    if success:
        log(f"Logged in as {user}", "success")
        return True

    success, output = run_quiet(
        ["oc", "login", "-u", settings.username, "-p", settings.password]
    )
    if success:
        log(f"Logged in as {settings.username}", "success")
    else:
        log(f"Login failed: {output}", "warning")
    return success


def cluster_ip() -> str:
    """Get the IP address of the minishift VM."""
    success, output = run_quiet(["minishift", "ip"])
    if not success or not output:
        log(f"Could not get the minishift IP: {output}", "warning")
        return ""
    return output


def api_server_url() -> str:
    """Get the URL of the cluster API server."""
    return f"https://{cluster_ip()}:8443"


def bootstrap(options: ParsedOptions, settings: Settings) -> None:
    """Make sure a local cluster is running and we are logged in to it."""
    check_prerequisites()

    if is_running():
        log("minishift is already running", "success")
    else:
        start_cluster(options)

    bind_environment()
    switch_context()
    ensure_login(settings)

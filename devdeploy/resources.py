"""Remote resource creation and template instantiation for devdeploy."""

from typing import Optional

from .cluster import cluster_ip
from .config import (
    APP_NAME,
    DEFAULT_TAG,
    OAUTH_SERVICE_ACCOUNT,
    ROUTE_NAME,
    TEMPLATE_NAME,
    Settings,
)
from .utils import log, run, run_quiet


def resource_url(path: str, tag: Optional[str], settings: Settings) -> str:
    """Build the raw URL of a manifest in the templates repository.

    Args:
        path: Path of the manifest inside the repository
        tag: Version tag, "master" when unset
        settings: Settings naming the repository

    Returns:
        Remote URL of the manifest
    """
    return (
        f"https://{settings.repo_host}/{settings.repo_org}/{settings.repo_name}/"
        f"{tag or DEFAULT_TAG}/{path}"
    )


def create_resource(path: str, tag: Optional[str], settings: Settings) -> None:
    """Create a resource straight from its remote manifest.

    Raises:
        subprocess.CalledProcessError: If oc create fails
    """
    url = resource_url(path, tag, settings)
    log(f"Creating resources from {url}")
    run(["oc", "create", "-f", url])


def oauth_client_secret() -> str:
    """Get the token of the OAuth client service account."""
    success, token = run_quiet(["oc", "sa", "get-token", OAUTH_SERVICE_ACCOUNT])
    if not success:
        log(f"Could not get token for {OAUTH_SERVICE_ACCOUNT}: {token}", "warning")
        return ""
    return token


def route_hostname() -> str:
    """Hostname to expose the application under."""
    return f"{APP_NAME}.{cluster_ip()}.nip.io"


def instantiate_template(
    route_host: str,
    master_url: str,
    project: str,
    client_secret: str,
) -> None:
    """Create a new application from the template.

    Raises:
        subprocess.CalledProcessError: If oc new-app fails
    """
    log(f"Instantiating template {TEMPLATE_NAME}")
    run([
        "oc", "new-app", TEMPLATE_NAME,
        "-p", f"ROUTE_HOSTNAME={route_host}",
        "-p", f"OPENSHIFT_MASTER={master_url}",
        "-p", f"OPENSHIFT_PROJECT={project}",
        "-p", f"OPENSHIFT_OAUTH_CLIENT_SECRET={client_secret}",
    ])


def application_url(project: str) -> Optional[str]:
    """Get the URL of the application route in a project.

    Returns:
        The URL, or None if the route has no host
    """
    success, host = run_quiet([
        "oc", "get", "route", ROUTE_NAME,
        "-n", project,
        "-o", "jsonpath={.spec.host}",
    ])
    if not success or not host:
        return None
    return f"https://{host}"

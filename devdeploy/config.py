"""Configuration for devdeploy."""

from pydantic_settings import BaseSettings

# Local cluster context created by minishift
CLUSTER_CONTEXT = "minishift"

# Remote manifests, relative to the templates repository root
OAUTH_CLIENT_RESOURCE = "support/serviceaccount-as-oauthclient-restricted.yml"
TEMPLATE_RESOURCE = "syndesis-restricted.yml"

# Template created from TEMPLATE_RESOURCE
TEMPLATE_NAME = "syndesis-restricted"

# Service account acting as OAuth client
OAUTH_SERVICE_ACCOUNT = "syndesis-oauth-client"

# Route exposing the application
APP_NAME = "syndesis"
ROUTE_NAME = "syndesis"

# Deployment units polled for readiness, in order
DEPLOYMENTS = ["syndesis-rest", "syndesis-ui", "syndesis-keycloak"]

# Commands tried, in order, to open a URL
BROWSER_COMMANDS = ["open", "xdg-open", "gnome-open"]

DEFAULT_TAG = "master"


class Settings(BaseSettings):
    """Runtime settings, overridable through DEVDEPLOY_* environment variables."""

    # Cluster sizing
    memory: str = "4912"
    cpus: str = "2"
    disk_size: str = "20GB"
    openshift_version: str = "v3.6.0"

    # Deployment
    project: str = "syndesis"
    tag: str | None = None
    repo_host: str = "raw.githubusercontent.com"
    repo_org: str = "syndesisio"
    repo_name: str = "syndesis-openshift-templates"

    # Development-only credentials
    username: str = "developer"
    password: str = "developer"

    # Polling
    poll_interval: int = 10
    project_attempts: int = 10
    project_retry_delay: int = 10

    # Logging
    log_level: str = "WARNING"

    class Config:
        """Pydantic config."""

        env_prefix = "DEVDEPLOY_"
        case_sensitive = False


def get_settings() -> Settings:
    """Load settings from the environment."""
    return Settings()

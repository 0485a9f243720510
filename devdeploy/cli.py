"""CLI entry point for devdeploy."""

import subprocess
import time

import click
from rich.panel import Panel

from devdeploy import __version__
from devdeploy.browser import open_url
from devdeploy.cluster import api_server_url, bootstrap
from devdeploy.config import (
    DEPLOYMENTS,
    OAUTH_CLIENT_RESOURCE,
    TEMPLATE_RESOURCE,
    Settings,
    get_settings,
)
from devdeploy.options import ParsedOptions, options_help
from devdeploy.project import recreate_project
from devdeploy.readiness import wait_for_deployments
from devdeploy.resources import (
    application_url,
    create_resource,
    instantiate_template,
    oauth_client_secret,
    route_hostname,
)
from devdeploy.utils import configure_logging, console, die, log_header


def deploy(options: ParsedOptions, settings: Settings) -> str:
    """Run the whole workflow up to the point of opening the browser.

    Returns:
        URL of the deployed application
    """
    log_header("Local Cluster")
    bootstrap(options, settings)

    log_header(f"Project {options.project}")
    recreate_project(
        options.project,
        skip_confirmation=options.yes,
        attempts=settings.project_attempts,
        delay=settings.project_retry_delay,
        sleep=time.sleep,
    )

    log_header("Deploying")
    create_resource(OAUTH_CLIENT_RESOURCE, options.tag, settings)
    create_resource(TEMPLATE_RESOURCE, options.tag, settings)
    instantiate_template(
        route_host=route_hostname(),
        master_url=api_server_url(),
        project=options.project,
        client_secret=oauth_client_secret(),
    )

    log_header("Waiting for Deployments")
    wait_for_deployments(DEPLOYMENTS, interval=settings.poll_interval, sleep=time.sleep)

    url = application_url(options.project)
    if url is None:
        die(f"No route found for the application in project '{options.project}'")
    return url


def print_summary(options: ParsedOptions, url: str) -> None:
    """Print deployment summary."""
    console.print()
    console.print(
        Panel.fit(
            f"[bold green]Deployment complete![/bold green]\n\n"
            f"[bold]Project:[/bold] {options.project}\n"
            f"[bold]Version:[/bold] {options.tag or 'master'}\n"
            f"[bold]URL:[/bold]     {url}",
            border_style="green",
        )
    )


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "help_option_names": [],
    },
    epilog=(
        "\b\nOptions (--flag=value or --flag value):\n" + options_help()
        + "\n\n\b\n  --help, --version are only recognised as the sole argument."
    ),
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Start a local OpenShift cluster and deploy the application onto it."""
    # A flag value may itself look like --help or --version
    if args == ("--help",):
        click.echo(ctx.get_help())
        ctx.exit()
    if args == ("--version",):
        click.echo(f"{ctx.info_name}, version {__version__}")
        ctx.exit()

    settings = get_settings()
    configure_logging(settings.log_level)
    options = ParsedOptions.from_args(args, settings)

    try:
        url = deploy(options, settings)
    except subprocess.CalledProcessError as e:
        die(f"Command failed: {' '.join(e.cmd)}", e.returncode)
    except KeyboardInterrupt:
        console.print()
        die("Interrupted", 130)

    print_summary(options, url)
    open_url(url)


if __name__ == "__main__":
    main()

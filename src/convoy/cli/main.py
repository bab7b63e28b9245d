"""Main CLI implementation using Typer."""

import asyncio
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from convoy.agent.config import ConfigError
from convoy.agent.main import run_agent
from convoy.agent.source import ConfigSourceError
from convoy.cli.commands import load_desired_state, show_desired_state
from convoy.models.config import AgentConfig
from convoy.utils.logging import setup_logging


# Create Typer app
app = typer.Typer(
    name="convoy",
    help="Convoy - declarative Docker resource reconciliation",
    add_completion=False,
)

# Console for rich output
console = Console()


CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    envvar=["CONVOY_CONFIG_URL", "AGENT_CFG_URL"],
    help="Configuration locator (file://path, http(s)://url or a path)",
)


def _build_config(**kwargs) -> AgentConfig:
    """Validate CLI options into an AgentConfig."""
    try:
        return AgentConfig(**kwargs)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def _start_agent(config: AgentConfig, once: bool):
    setup_logging(config.log_level)
    try:
        asyncio.run(run_agent(config, once=once))
    except KeyboardInterrupt:
        console.print("\nAgent shutdown requested")


def _agent_command(once: bool):
    """Build a command sharing the agent options."""

    def command(
        config_url: Optional[str] = CONFIG_OPTION,
        poll_interval: int = typer.Option(
            30, "--interval", "-i", envvar="CONVOY_POLL_INTERVAL", help="Seconds between passes"
        ),
        stop_timeout: int = typer.Option(
            30, "--stop-timeout", envvar="CONVOY_STOP_TIMEOUT", help="Container stop grace period in seconds"
        ),
        recreate: str = typer.Option(
            "on_change", "--recreate", envvar="CONVOY_RECREATE",
            help="Replace declared containers 'on_change' of the configuration or 'always'",
        ),
        legacy_network_short_circuit: bool = typer.Option(
            False, "--legacy-network-short-circuit", envvar="CONVOY_LEGACY_NETWORK_SHORT_CIRCUIT",
            help="Stop network creation at the first network that already exists",
        ),
        pull_images: bool = typer.Option(
            True, "--pull/--no-pull", envvar="CONVOY_PULL_IMAGES", help="Pull images before creating containers"
        ),
        watch: bool = typer.Option(
            True, "--watch/--no-watch", envvar="CONVOY_WATCH", help="Reconcile early when a local config file changes"
        ),
        docker_api_version: str = typer.Option(
            "auto", "--docker-api-version", envvar="DOCKER_API_VERSION", help="Docker API version"
        ),
        log_level: str = typer.Option(
            "INFO", "--log-level", "-l", envvar="CONVOY_LOG_LEVEL", help="Log level"
        ),
    ):
        config = _build_config(
            config_url=config_url,
            poll_interval=poll_interval,
            stop_timeout=stop_timeout,
            recreate=recreate,
            legacy_network_short_circuit=legacy_network_short_circuit,
            pull_images=pull_images,
            watch=watch,
            docker_api_version=docker_api_version,
            log_level=log_level,
        )
        _start_agent(config, once=once)

    return command


app.command("run", help="Run the agent, reconciling on every poll interval.")(_agent_command(once=False))
app.command("reconcile", help="Run a single reconciliation pass and exit.")(_agent_command(once=True))


@app.command("validate")
def validate_command(config_url: Optional[str] = CONFIG_OPTION):
    """Load the configuration and show the declared resources."""
    if not config_url:
        console.print("[red]Error:[/red] No configuration locator given")
        raise typer.Exit(1)
    try:
        desired = load_desired_state(config_url)
    except (ConfigSourceError, ConfigError) as e:
        console.print("[red]✗[/red] Configuration is invalid")
        console.print(f"  Error: {e}")
        raise typer.Exit(1) from e
    show_desired_state(desired)


def main():
    """Main entry point for CLI."""
    app()

"""Command implementations for CLI."""

import asyncio

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from convoy.agent.config import ConfigManager
from convoy.models.state import DesiredState


console = Console()


def load_desired_state(config_url: str) -> DesiredState:
    """Load a configuration document with a progress spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Validating configuration...", total=None)

        desired = asyncio.run(ConfigManager(config_url).load())

        progress.update(task, completed=True)

    return desired


def show_desired_state(desired: DesiredState):
    """Print the declared resources as tables."""
    console.print("[green]✓[/green] Configuration is valid")
    console.print(f"  Volumes: {len(desired.volumes)}")
    console.print(f"  Networks: {len(desired.networks)}")
    console.print(f"  Containers: {len(desired.containers)}")
    console.print()

    if desired.volumes:
        table = Table(title="Volumes")
        table.add_column("Name", style="cyan")
        table.add_column("Driver", style="magenta")
        table.add_column("Labels", style="dim")

        for spec in desired.volumes:
            labels = ", ".join(f"{k}={v}" for k, v in spec.labels.items())
            table.add_row(spec.name, spec.driver, labels)

        console.print(table)
        console.print()

    if desired.networks:
        table = Table(title="Networks")
        table.add_column("Name", style="cyan")
        table.add_column("Driver", style="magenta")
        table.add_column("Subnets")
        table.add_column("IPv6")

        for name, spec in desired.networks.items():
            subnets = ""
            if spec.ipam:
                subnets = ", ".join(pool.subnet for pool in spec.ipam.config if pool.subnet)
            ipv6 = "✓" if spec.enable_ipv6 else "✗"
            table.add_row(name, spec.driver, subnets, ipv6)

        console.print(table)
        console.print()

    if desired.containers:
        table = Table(title="Containers")
        table.add_column("Name", style="cyan")
        table.add_column("Image", style="magenta")
        table.add_column("Command", style="dim", max_width=40)
        table.add_column("Restart")
        table.add_column("Privileged")

        for name, spec in desired.containers.items():
            command = " ".join(spec.config.cmd or [])
            restart = spec.host_config.restart_policy.name if spec.host_config.restart_policy else "no"
            privileged = "[red]●[/red]" if spec.host_config.privileged else "○"
            table.add_row(name, spec.image, command, restart, privileged)

        console.print(table)

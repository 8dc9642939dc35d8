"""AWS Network Planner CLI"""

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console

from .config import PlannerConfig, load_config
from .core import DisplayRenderer, run_with_spinner, setup_logging
from .core.cache import all_caches, format_ttl, get_default_ttl, parse_ttl, set_default_ttl
from .core.display import BaseDisplay
from .core.renderer import FORMATS
from .errors import PlanningError
from .modules.plan import PlanDisplay
from .modules.zones import ZoneClient, ZoneDisplay, get_available_zones
from .planner import plan_network

app = typer.Typer(
    name="aws-plan",
    help="Plan VPC subnets, availability zones and NAT gateways",
    no_args_is_help=True,
)
console = Console()


class Ctx:
    def __init__(self):
        self.format: str = "table"
        self.debug: bool = False
        self.timeout: int = 120


# Global context instance
gctx = Ctx()


def _split(values: Optional[list[str]]) -> list[str]:
    """Accept both repeated options and CSV values."""
    out = []
    for value in values or []:
        out.extend(v.strip() for v in value.split(",") if v.strip())
    return out


def _fail(message: str) -> NoReturn:
    DisplayRenderer(console).error(message)
    raise typer.Exit(1)


def _resolve_region(region: Optional[str], profile: Optional[str]) -> str:
    """Explicit region, else the profile's; opening the profile may raise DiscoveryError."""
    if region:
        return region
    session_region = ZoneClient(profile).session.region_name
    if not session_region:
        _fail("No region: pass --region, set it in the config, or configure AWS_REGION")
    return session_region


@app.callback()
def _global(
    output_format: str = typer.Option("table", "--format", help="table|json|yaml"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also write debug logs to this file"
    ),
    timeout: int = typer.Option(
        120, "--timeout", help="Seconds allowed for AZ discovery"
    ),
):
    if output_format not in FORMATS:
        _fail(f"Invalid format: {output_format}. Use one of {', '.join(FORMATS)}")
    gctx.format = output_format
    gctx.debug = debug
    gctx.timeout = timeout
    setup_logging(
        debug=debug,
        log_file=str(log_file) if log_file else None,
        quiet=output_format != "table",
    )


@app.command("plan")
def plan_cmd(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML planner config"
    ),
    name: Optional[str] = typer.Option(None, "--name", help="Resource name prefix"),
    cidr: Optional[str] = typer.Option(None, "--cidr", help="VPC base CIDR"),
    public: Optional[int] = typer.Option(None, "--public", help="Public subnets"),
    private: Optional[int] = typer.Option(None, "--private", help="Private subnets"),
    azs: Optional[list[str]] = typer.Option(
        None, "--az", help="Explicit AZ (repeat or CSV)"
    ),
    az_count: Optional[int] = typer.Option(None, "--az-count", help="Max AZs"),
    ha: Optional[bool] = typer.Option(
        None, "--ha/--no-ha", help="One NAT gateway per public subnet"
    ),
    cluster_name: Optional[str] = typer.Option(
        None, "--cluster-name", help="EKS cluster name for subnet tags"
    ),
    region: Optional[str] = typer.Option(None, "--region", "-r"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p"),
    available: Optional[list[str]] = typer.Option(
        None, "--available", help="Available AZs (skips AWS discovery)"
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Don't use cache"),
    refresh_cache: bool = typer.Option(
        False, "--refresh-cache", help="Force refresh cache"
    ),
):
    """Plan subnets and NAT gateways for a VPC"""
    try:
        config = load_config(config_file) if config_file else PlannerConfig()
        config = config.merged(
            name=name,
            cidr=cidr,
            public_subnets=public,
            private_subnets=private,
            availability_zones=_split(azs) or None,
            az_count=az_count,
            high_availability=ha,
            cluster_name=cluster_name,
            region=region,
        )

        offered = _split(available)
        if not offered:
            target = _resolve_region(config.region, profile)
            config = config.merged(region=target)
            offered = run_with_spinner(
                lambda: get_available_zones(
                    target, profile, no_cache=no_cache, refresh_cache=refresh_cache
                ),
                f"Discovering availability zones in {target}",
                timeout_seconds=gctx.timeout,
                console=console,
            )

        plan = plan_network(config, offered)
    except (PlanningError, TimeoutError) as e:
        _fail(str(e))

    if DisplayRenderer(console).render(plan.to_dict(), gctx.format):
        return
    PlanDisplay(console).show(plan)


@app.command("zones")
def zones_cmd(
    region: Optional[str] = typer.Option(None, "--region", "-r"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p"),
):
    """List availability zones in a region"""
    try:
        target = _resolve_region(region, profile)
        client = ZoneClient(profile)
        zones = run_with_spinner(
            lambda: client.describe(target),
            f"Describing availability zones in {target}",
            timeout_seconds=gctx.timeout,
            console=console,
        )
    except (PlanningError, TimeoutError) as e:
        _fail(str(e))

    if DisplayRenderer(console).render(zones, gctx.format):
        return
    ZoneDisplay(console).show_list(zones, target)


@app.command("clear-cache")
def clear_all_cache():
    """Clear all discovery caches"""
    caches = all_caches()
    for cache_obj in caches:
        cache_obj.clear()
        console.print(f"[green]Cleared {cache_obj.namespace} cache[/]")
    console.print(f"[bold green]{len(caches)} cache(s) cleared[/]")


@app.command("cache-timeout")
def set_cache_timeout(
    timeout: str = typer.Argument(
        ...,
        help="Timeout value: number with optional m(inutes)/h(ours)/d(ays) suffix. e.g. 15m, 1h, 2d",
    ),
):
    """Set default cache timeout (e.g. 15m, 1h, 2d)"""
    try:
        seconds = parse_ttl(timeout)
    except ValueError as e:
        _fail(str(e))
    set_default_ttl(seconds)
    console.print(
        f"[green]Cache timeout set to {format_ttl(seconds)} ({seconds} seconds)[/]"
    )


@app.command("show-config")
def show_config(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML planner config"
    ),
):
    """Show effective planner configuration and cache settings"""
    try:
        config = load_config(config_file) if config_file else PlannerConfig()
    except PlanningError as e:
        _fail(str(e))

    ttl = get_default_ttl()
    if DisplayRenderer(console).render(
        {"planner": config.model_dump(), "cache_ttl_seconds": ttl}, gctx.format
    ):
        return
    display = BaseDisplay(console)
    display.panel(
        "Planner configuration",
        [(key, value) for key, value in config.model_dump().items()],
    )
    console.print(f"[bold]Cache timeout:[/] {format_ttl(ttl)} ({ttl} seconds)")
    display.print_cache_info(
        [info for info in (c.get_info() for c in all_caches()) if info]
    )


def main():
    app()


if __name__ == "__main__":
    main()

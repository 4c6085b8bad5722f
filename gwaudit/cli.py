"""CLI entry point for the API Gateway log audit."""

import sys
from typing import Optional, Tuple

import click
from rich.console import Console

from . import __version__
from .audit import VALID_MODES, audit_gateways, check_access_log_format
from .config import AuditConfig, ConfigError, load_config, merge_overrides
from .connectors import ConnectorError, connect_families
from .logging import setup_logging
from .report import render_json, render_text


@click.group()
@click.version_option(version=__version__, prog_name="gwaudit")
def cli():
    """gwaudit: verify API Gateway execution and access logging.

    Run 'gwaudit audit API_ID [API_ID/STAGE ...]' to audit gateways.
    Run 'gwaudit check-format FORMAT' to check an access log format.
    """


@cli.command()
@click.argument("selectors", nargs=-1)
@click.option(
    "--mode",
    "-m",
    type=click.Choice(VALID_MODES, case_sensitive=False),
    default=None,
    help="Whether selectors name gateways to audit (include) or to skip (exclude)",
)
@click.option(
    "--ignore-access-log-settings",
    is_flag=True,
    help="Skip access log checks",
)
@click.option(
    "--include-execution-log-groups",
    is_flag=True,
    help="Also report execution log groups of compliant REST stages",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML config file",
)
@click.option("--region", "-r", help="AWS region")
@click.option("--profile", "profile_name", help="AWS profile name")
@click.option("--workers", "-w", type=int, default=None, help="Gateways verified concurrently")
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output as JSON",
)
@click.option(
    "--fail-on-warning",
    is_flag=True,
    help="Exit non-zero when warnings are found",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def audit(
    selectors: Tuple[str, ...],
    mode: Optional[str],
    ignore_access_log_settings: bool,
    include_execution_log_groups: bool,
    config_path: Optional[str],
    region: Optional[str],
    profile_name: Optional[str],
    workers: Optional[int],
    output_json: bool,
    fail_on_warning: bool,
    verbose: bool,
):
    """Audit logging of API Gateway stages.

    SELECTORS are API ids ('a1b2c3d4e5') for every stage or 'apiId/stage'
    for a single stage. With --mode exclude they name what to skip.

    \b
    Example:
        gwaudit audit a1b2c3d4e5 f6g7h8i9j0/prod
        gwaudit audit --mode exclude legacyapi1 --json
        gwaudit audit --config audit.yaml
    """
    setup_logging(verbose=verbose, json_logs=output_json)

    try:
        config = load_config(config_path) if config_path else AuditConfig()
        config = merge_overrides(
            config,
            {
                "selectors": list(selectors) or None,
                "mode": mode.lower() if mode else None,
                "ignore_access_log_settings": ignore_access_log_settings or None,
                "include_execution_log_groups": include_execution_log_groups or None,
                "max_workers": workers,
            },
            {"region": region, "profile_name": profile_name},
        )
        families = connect_families(**config.aws.model_dump())
    except (ConfigError, ConnectorError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(2)

    result = audit_gateways(
        families,
        config.selectors,
        mode=config.mode,
        ignore_access_log_settings=config.ignore_access_log_settings,
        include_execution_log_groups=config.include_execution_log_groups,
        max_workers=config.max_workers,
    )

    if output_json:
        click.echo(render_json(result))
    else:
        render_text(result, Console())

    if result.has_errors or (fail_on_warning and result.warnings):
        sys.exit(1)


@cli.command("check-format")
@click.argument("log_format")
def check_format(log_format: str):
    """Check an access log format for the required fields.

    \b
    Example:
        gwaudit check-format '{"method": "$context.httpMethod", ...}'
    """
    problem = check_access_log_format(log_format)
    if problem is None:
        click.echo(click.style("✓ Access log format is compliant", fg="green"))
        return

    click.echo(click.style(f"✗ {problem.message}", fg="yellow"))
    sys.exit(1)


# Keep 'main' as an alias for the console script
main = cli


if __name__ == "__main__":
    cli()

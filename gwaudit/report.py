"""Render audit results for the terminal or as JSON."""

import json

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .audit.diagnostics import AuditResult, Severity

SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
}


def render_json(result: AuditResult) -> str:
    return json.dumps(result.to_dict(), indent=2)


def render_text(result: AuditResult, console: Console) -> None:
    """Print diagnostics and log group names as rich tables."""
    if result.diagnostics:
        table = Table(title="Diagnostics", show_lines=False)
        table.add_column("Severity", no_wrap=True)
        table.add_column("Message")
        for diagnostic in result.diagnostics:
            style = SEVERITY_STYLES[diagnostic.severity]
            table.add_row(f"[{style}]{diagnostic.severity.value}[/{style}]", Text(diagnostic.message))
        console.print(table)
    else:
        console.print("[green]✓ No logging issues found[/green]")

    console.print()
    if result.log_group_names:
        console.print("[bold]Log groups:[/bold]")
        for name in sorted(result.log_group_names):
            console.print(f"  • {name}", markup=False, highlight=False)
    else:
        console.print("[dim]No compliant log groups.[/dim]")

    console.print()
    console.print(
        f"{len(result.errors)} error(s), {len(result.warnings)} warning(s), "
        f"{len(result.log_group_names)} log group(s)"
    )

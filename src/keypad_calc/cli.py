"""
Command-line interface for Keypad Calc.

Provides commands for:
- Evaluating a single expression
- Running an interactive terminal keypad
- Running the API server
"""

import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from keypad_calc.config import configure, load_yaml_config, settings, settings_environ
from keypad_calc.engine import evaluate
from keypad_calc.log import configure_logging
from keypad_calc.session import InvalidKeyError, KeypadSession

app = typer.Typer(
    name="calc",
    help="Keypad Calc - button-driven arithmetic evaluator",
    add_completion=False,
)

console = Console()

KEYPAD_ROWS = [
    ("7", "8", "9", "/"),
    ("4", "5", "6", "*"),
    ("1", "2", "3", "-"),
    ("0", ".", "=", "+"),
    ("C", "⌫", "", ""),
]


@app.callback()
def main(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML settings file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Log level"),
):
    """Load settings and set up logging before any command runs."""
    overrides = load_yaml_config(config) if config else {}
    if log_level:
        overrides["log_level"] = log_level
    if overrides:
        configure(overrides)
    configure_logging(settings.log_level, settings.json_logs)


# =============================================================================
# Evaluation Commands
# =============================================================================

@app.command("eval")
def eval_expression(
    expression: str = typer.Argument(..., help="Expression such as 2+3*4"),
    precision: Optional[int] = typer.Option(
        None, "--precision", "-p", min=0, max=15, help="Decimal places"
    ),
):
    """Evaluate one expression and print the result."""
    places = settings.precision if precision is None else precision
    result = evaluate(expression, places=places)

    if not result.ok:
        console.print(f"[red]{settings.error_text}[/] [dim]({result.error.value})[/]")
        raise typer.Exit(1)

    console.print(result.value)


# =============================================================================
# Keypad Commands
# =============================================================================

@app.command()
def keypad():
    """
    Run an interactive keypad in the terminal.

    Each line typed is a sequence of button presses, e.g. ``12+3=``.
    Type ``history`` to list results and ``quit`` to leave.
    """
    session = KeypadSession()
    console.print(_keypad_table())
    console.print(_screen(session))

    while True:
        try:
            line = console.input("[bold cyan]keys>[/] ")
        except (EOFError, KeyboardInterrupt):
            break

        command = line.strip().lower()
        if command in ("quit", "exit", "q"):
            break
        if command == "history":
            console.print(_history_table(session))
            continue
        if command == "":
            continue

        try:
            session.press_many(line)
        except InvalidKeyError as e:
            console.print(f"[red]{escape(str(e))}[/]")
        console.print(_screen(session))


# =============================================================================
# Server Commands
# =============================================================================

@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind to"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
):
    """Start the Keypad Calc API server."""
    import uvicorn

    host = host or settings.host
    port = port or settings.port
    console.print(f"[bold green]Starting Keypad Calc server on {host}:{port}[/]")

    # The app is imported by name, possibly in a reloader subprocess
    os.environ.update(settings_environ())

    uvicorn.run(
        "keypad_calc.api:app",
        host=host,
        port=port,
        reload=reload,
    )


# =============================================================================
# Helpers
# =============================================================================

def _screen(session: KeypadSession) -> Panel:
    """Render the calculator screen: previous expression above the display."""
    text = Text(justify="right")
    if session.sub_display:
        text.append(session.sub_display + "\n", style="dim")
    style = "bold red" if session.display == settings.error_text else "bold"
    text.append(session.display, style=style)
    return Panel(text, title="Keypad Calc", width=32)


def _keypad_table() -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2))
    for row in KEYPAD_ROWS:
        table.add_row(*row)
    return table


def _history_table(session: KeypadSession) -> Table:
    table = Table(title="History")
    table.add_column("#", style="dim")
    table.add_column("Expression", style="cyan")
    table.add_column("Result", style="green")
    table.add_column("Time", style="dim")

    for i, entry in enumerate(session.get_history(), start=1):
        result = entry.result if entry.result is not None else f"[red]{entry.error.value}[/]"
        table.add_row(str(i), entry.expression, result, entry.created_at.strftime("%H:%M:%S"))

    return table


if __name__ == "__main__":
    app()

"""Conduit CLI: drive the client core from the terminal."""

import asyncio
import dataclasses
import tomllib
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from conduit import __version__
from conduit.app import LoginMsg
from conduit.config import get_config_path, load_config, write_config_template
from conduit.context import AppContext, get_context, set_context
from conduit.errors import ConduitError
from conduit.forms import login as login_form
from conduit.logging import configure_logging
from conduit.output import OutputContext, get_output_context, set_output_context
from conduit.pages import login as login_page
from conduit.route import from_path, to_path
from conduit.runtime import Runtime
from conduit.summary import describe


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"conduit {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="conduit",
    help="Conduit client core: routing, forms and page loading from the terminal",
    no_args_is_help=True,
)

console = Console()

# Set by the main callback
_config_path: Path | None = None


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config.toml (default: ~/.config/conduit/config.toml)",
    ),
) -> None:
    """Conduit CLI - client core for the Conduit social blogging API."""
    global console
    global _config_path
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
    )
    _config_path = config_path
    set_output_context(OutputContext(console=console, json_mode=json_output))


def _load_context() -> AppContext:
    """Build the application context from config, exiting on a bad file."""
    ctx = get_output_context()
    try:
        config = load_config(_config_path)
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        ctx.error(f"Invalid config: {e}")
        raise typer.Exit(1) from None
    app_context = AppContext.from_config(config)
    set_context(app_context)
    return app_context


async def _visit(path: str) -> Runtime:
    runtime = Runtime()
    runtime.start(path)
    await runtime.run_until_idle()
    return runtime


# ============================================================================
# conduit init
# ============================================================================


@app.command()
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a default config file."""
    ctx = get_output_context()
    config_path = _config_path or get_config_path()
    if config_path.exists() and not force:
        ctx.print(f"[yellow]Config already exists:[/yellow] {config_path}")
        ctx.print_json({"config": str(config_path), "created": False})
        return
    write_config_template(config_path)
    ctx.success(f"Created config template: {config_path}", {"config": str(config_path)})


# ============================================================================
# conduit route
# ============================================================================


@app.command()
def route(path: str = typer.Argument(..., help="URL path, e.g. /article/my-slug")) -> None:
    """Show which route a URL path decodes to."""
    ctx = get_output_context()
    target = from_path(path)
    if target is None:
        ctx.error(f"No route for {path}", {"path": path})
        raise typer.Exit(1)

    params = dataclasses.asdict(target)
    ctx.print_json({"route": type(target).__name__, "params": params, "path": to_path(target)})
    ctx.print(f"[bold]{type(target).__name__}[/bold] {to_path(target)}")
    for key, value in params.items():
        ctx.print(f"  {key}: {value}")


# ============================================================================
# conduit visit
# ============================================================================


@app.command()
def visit(path: str = typer.Argument("/", help="URL path to open")) -> None:
    """Open a page, wait for its data, and print what it shows."""
    _load_context()
    try:
        runtime = asyncio.run(_visit(path))
    except ConduitError as e:
        get_output_context().error(str(e))
        raise typer.Exit(1) from None
    get_output_context().page(describe(runtime.application.model))


# ============================================================================
# conduit login / logout / whoami
# ============================================================================


async def _login(email: str, password: str) -> Runtime:
    runtime = await _visit("/login")
    for kind, value in ((login_form.Kind.EMAIL, email), (login_form.Kind.PASSWORD, password)):
        runtime.dispatch(LoginMsg(login_page.FieldChanged(login_form.Field(kind, value))))
    runtime.dispatch(LoginMsg(login_page.Submitted()))
    await runtime.run_until_idle()
    return runtime


@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Account password"
    ),
) -> None:
    """Log in through the login page and remember the viewer."""
    ctx = get_output_context()
    app_context = _load_context()
    try:
        runtime = asyncio.run(_login(email, password))
    except ConduitError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    summary = describe(runtime.application.model)
    if summary["page"] == "Login":
        ctx.problems("Login failed", summary["problems"])
        raise typer.Exit(1)

    viewer = app_context.store.load()
    username = viewer.username if viewer else summary["viewer"]
    ctx.success(f"Logged in as {username}", {"username": username})


@app.command()
def logout() -> None:
    """Forget the stored viewer."""
    _load_context()
    try:
        asyncio.run(_visit("/logout"))
    except ConduitError as e:
        get_output_context().error(str(e))
        raise typer.Exit(1) from None
    get_output_context().success("Logged out")


@app.command()
def whoami() -> None:
    """Show the stored viewer, if any."""
    ctx = get_output_context()
    _load_context()
    viewer = get_context().store.load()
    if viewer is None:
        ctx.print_json({"username": None})
        ctx.print("Not logged in", style="yellow")
        return
    ctx.print_json({"username": viewer.username, "email": viewer.email})
    ctx.print(f"[bold]{viewer.username}[/bold] <{viewer.email}>")

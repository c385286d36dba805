from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional

import anyio
import typer

from randomuser_mcp.config import get_settings
from randomuser_mcp.errors import RandomUserError
from randomuser_mcp.infrastructure.client import RandomUserClient
from randomuser_mcp.orchestrator import build_request_plan
from randomuser_mcp.reporter import print_plan, print_tools
from randomuser_mcp.server import serve_stdio
from randomuser_mcp.tools import call_tool, get_tool_definition, list_tool_specs, parse_arguments
from randomuser_mcp.utils.logging import configure_logging

app = typer.Typer(help="Random User MCP server and CLI.")


def _setup_logging() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


def _parse_weights(weights: Optional[List[str]]) -> Dict[str, float]:
    parsed: Dict[str, float] = {}
    for item in weights or []:
        code, sep, raw = item.partition("=")
        try:
            if not sep:
                raise ValueError(item)
            parsed[code.strip().upper()] = float(raw)
        except ValueError as exc:
            raise typer.BadParameter(f"expected CODE=WEIGHT, got '{item}'") from exc
    return parsed


def _build_arguments(
    gender: Optional[str] = None,
    nationality: Optional[List[str]] = None,
    weights: Optional[List[str]] = None,
    include: Optional[List[str]] = None,
    exclude: Optional[List[str]] = None,
    output_format: Optional[str] = None,
) -> Dict[str, Any]:
    """Translate CLI options into tool arguments."""
    if include and exclude:
        raise typer.BadParameter("use either --include or --exclude, not both")

    arguments: Dict[str, Any] = {}
    if gender:
        arguments["gender"] = gender
    if nationality:
        arguments["nationality"] = nationality[0] if len(nationality) == 1 else list(nationality)
    if weights:
        arguments["nationalityWeights"] = _parse_weights(weights)
    if include:
        arguments["fields"] = {"mode": "include", "values": list(include)}
    elif exclude:
        arguments["fields"] = {"mode": "exclude", "values": list(exclude)}
    if output_format:
        arguments["format"] = {"type": output_format}
    return arguments


def _run_tool(name: str, arguments: Dict[str, Any]) -> None:
    _setup_logging()
    try:
        with RandomUserClient() as client:
            text = call_tool(name, arguments, client)
    except RandomUserError as exc:
        typer.echo(f"Error ({exc.code}): {exc.message}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(text)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"API={settings.api_url} timeout={settings.timeout_seconds}s | "
        f"server={settings.server_name}/{settings.server_version} | log={settings.log_level}"
    )


@app.command()
def serve() -> None:
    """
    Run the MCP server on stdin/stdout.
    """
    _setup_logging()
    with RandomUserClient() as client:
        anyio.run(serve_stdio, client)


@app.command()
def tools() -> None:
    """
    List the tools the server exposes.
    """
    print_tools(list_tool_specs())


@app.command()
def plan(
    count: int = typer.Option(..., "--count", "-c", help="Total number of users."),
    gender: Optional[str] = typer.Option(None, "--gender", "-g", help="female or male."),
    nationality: Optional[List[str]] = typer.Option(
        None, "--nationality", "-n", help="Nationality code; repeat for several."
    ),
    weight: Optional[List[str]] = typer.Option(
        None, "--weight", "-w", help="Per-nationality weight as CODE=WEIGHT; repeatable."
    ),
) -> None:
    """
    Show how a multi-user request would be split, without calling the API.
    """
    arguments = _build_arguments(gender=gender, nationality=nationality, weights=weight)
    arguments["count"] = count
    try:
        request = parse_arguments(get_tool_definition("get_multiple_users"), arguments)
    except RandomUserError as exc:
        typer.echo(f"Error ({exc.code}): {exc.message}", err=True)
        raise typer.Exit(code=1) from exc
    print_plan(build_request_plan(request), requested=count)


@app.command()
def user(
    gender: Optional[str] = typer.Option(None, "--gender", "-g", help="female or male."),
    nationality: Optional[str] = typer.Option(None, "--nationality", "-n", help="Nationality code."),
    include: Optional[List[str]] = typer.Option(None, "--include", "-i", help="Field to include."),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Field to exclude."),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="json, csv, sql or xml."
    ),
) -> None:
    """
    Fetch one random user (get_random_user).
    """
    arguments = _build_arguments(
        gender=gender,
        nationality=[nationality] if nationality else None,
        include=include,
        exclude=exclude,
        output_format=output_format,
    )
    _run_tool("get_random_user", arguments)


@app.command()
def users(
    count: int = typer.Option(..., "--count", "-c", help="Number of users (1-5000)."),
    gender: Optional[str] = typer.Option(None, "--gender", "-g", help="female or male."),
    nationality: Optional[List[str]] = typer.Option(
        None, "--nationality", "-n", help="Nationality code; repeat for several."
    ),
    weight: Optional[List[str]] = typer.Option(
        None, "--weight", "-w", help="Per-nationality weight as CODE=WEIGHT; repeatable."
    ),
    include: Optional[List[str]] = typer.Option(None, "--include", "-i", help="Field to include."),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Field to exclude."),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="json, csv, sql or xml."
    ),
) -> None:
    """
    Fetch several random users (get_multiple_users).
    """
    arguments = _build_arguments(
        gender=gender,
        nationality=nationality,
        weights=weight,
        include=include,
        exclude=exclude,
        output_format=output_format,
    )
    arguments["count"] = count
    _run_tool("get_multiple_users", arguments)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()

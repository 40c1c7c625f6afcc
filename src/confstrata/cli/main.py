"""
Main CLI entry point for Confstrata.

Provides a read-only inspection interface using Click: load one or more
configuration sources, then show the merged tree, look up a value, or ask
which layer a value came from.
"""

import asyncio as _asyncio
import json as _json
import logging as _logging
import os as _os
import sys as _sys
import typing as _typing

import click as _click
import pydantic as _pydantic
import yaml as _yaml

import confstrata
import confstrata.config as config
import confstrata.errors as errors
import confstrata.store as store
import confstrata.utils.deep as deep

_logger = _logging.getLogger(__name__)

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}


def _run_async(coro: _typing.Coroutine[_typing.Any, _typing.Any, _typing.Any]) -> _typing.Any:
    """Run an async coroutine synchronously."""
    return _asyncio.run(coro)


async def _load_sources(
    config_store: store.Config,
    sources: tuple[str, ...],
    branch: str | None,
) -> None:
    """Add each source, then its branch overlay when one exists."""
    for source in sources:
        await config_store.add(source)
        if not branch:
            continue
        try:
            await config_store.add(source, branch)
        except errors.ResolveError as e:
            # A missing overlay is normal; anything else is a real failure
            if not isinstance(e.cause, errors.NotFoundError):
                raise
            _logger.debug("No %r overlay for %s", branch, source)


def _to_json(value: _typing.Any) -> str:
    return _json.dumps(deep.clone(value), indent=2, ensure_ascii=False, default=str)


def _parse_json_or_text(value: str) -> _typing.Any:
    """Parse a CLI argument as JSON, falling back to the raw string."""
    try:
        return _json.loads(value)
    except ValueError:
        return value


def _should_use_color(cli_flag: bool | None) -> tuple[bool, bool]:
    """Determine whether to use color output.

    Priority:
    1. CLI flag (--color / --no-color) if specified
    2. NO_COLOR env var (if set, disable color) - standard convention
    3. Auto-detect: color if stdout is a TTY

    Returns:
        Tuple of (color_enabled, force_color).
    """
    if cli_flag is not None:
        return (cli_flag, cli_flag)
    if _os.environ.get("NO_COLOR") is not None:
        return (False, False)
    return (_sys.stdout.isatty(), False)


def _print_yaml(yaml_text: str, *, color: bool = True, force_color: bool = False) -> None:
    """Print YAML text, optionally with syntax highlighting."""
    if color:
        import rich.console as _rich_console
        import rich.syntax as _rich_syntax

        console = _rich_console.Console(
            force_terminal=force_color,
            no_color=False if force_color else None,
        )
        console.print(
            _rich_syntax.Syntax(yaml_text, "yaml", theme="monokai", background_color="default")
        )
        return

    _click.echo(yaml_text, nl=False)


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(confstrata.__version__, "-V", "--version", prog_name="confstrata")
@_click.option(
    "-s",
    "--source",
    "sources",
    multiple=True,
    type=_click.Path(),
    help="Config file or directory (repeatable, later sources win). Default: current directory.",
)
@_click.option("-b", "--branch", default=None, help="Branch overlay to load on top of each source.")
@_click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@_click.pass_context
def cli(
    ctx: _click.Context,
    sources: tuple[str, ...],
    branch: str | None,
    verbose: bool,
) -> None:
    """Inspect layered configuration.

    Sources are merged in the order given. With --branch, each source is
    followed by its config-<branch>.* overlay when that file exists.
    """
    try:
        settings = config.Settings()
    except _pydantic.ValidationError as e:
        raise _click.ClickException(f"Invalid CONFSTRATA_* settings:\n{e}") from None

    _logging.basicConfig(
        level=_logging.DEBUG if verbose else settings.log_level_value(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=_sys.stderr,
    )

    try:
        config_store = store.Config.from_settings(settings)
    except ValueError as e:
        raise _click.ClickException(str(e)) from None

    try:
        _run_async(_load_sources(config_store, sources or (".",), branch or settings.branch))
    except errors.ResolveError as e:
        raise _click.ClickException(f"{e}: {e.cause}") from None
    config_store.freeze()

    ctx.ensure_object(dict)
    ctx.obj["config"] = config_store


@cli.command(name="show")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option("--section", type=str, default=None, help="Show a single path only")
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Enable/disable syntax highlighting (default: auto-detect TTY)",
)
@_click.pass_context
def show(ctx: _click.Context, as_json: bool, section: str | None, use_color: bool | None) -> None:
    """Show the merged configuration.

    Examples:
        confstrata -s ./conf show
        confstrata -s ./conf -b dev show --json
        confstrata -s ./conf show --section server
    """
    config_store: store.Config = ctx.obj["config"]

    data: _typing.Any = config_store.to_dict()
    if section:
        value = config_store.find(section, deep.MISSING)
        if value is deep.MISSING:
            raise _click.ClickException(f"Unknown section: {section}")
        data = deep.clone(value)

    if as_json:
        _click.echo(_to_json(data))
        return

    color_enabled, force_color = _should_use_color(use_color)
    yaml_text = _yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    _print_yaml(yaml_text, color=color_enabled, force_color=force_color)


@cli.command(name="get")
@_click.argument("path")
@_click.option("--default", "default", default=None, help="Fallback value (parsed as JSON if possible)")
@_click.pass_context
def get(ctx: _click.Context, path: str, default: str | None) -> None:
    """Look up PATH (slash or dot notation) and print it as JSON."""
    config_store: store.Config = ctx.obj["config"]

    fallback = deep.MISSING if default is None else _parse_json_or_text(default)
    value = config_store.find(path, fallback)
    if value is deep.MISSING:
        raise _click.ClickException(f"Not found: {path}")
    _click.echo(_to_json(value))


@cli.command(name="which")
@_click.argument("path")
@_click.option("--value", "expected", default=None, help="Only the last layer matching this value (JSON)")
@_click.pass_context
def which(ctx: _click.Context, path: str, expected: str | None) -> None:
    """Show which layers define PATH, most recent first.

    With --value, print only the last layer whose value matches. Lists
    match when they contain every expected element, mappings when they
    hold every expected key.
    """
    config_store: store.Config = ctx.obj["config"]

    if expected is not None:
        identifier = config_store.find_layer_by_path_and_value(path, _parse_json_or_text(expected))
        if identifier is None:
            raise _click.ClickException(f"No layer matches {expected} at {path}")
        _click.echo(identifier)
        return

    entries = config_store.list_layers_by_path(path)
    if not entries:
        raise _click.ClickException(f"Not found: {path}")
    for identifier, value in entries:
        _click.echo(f"{identifier}\t{_json.dumps(deep.clone(value), ensure_ascii=False, default=str)}")


@cli.command(name="layers")
@_click.pass_context
def layers(ctx: _click.Context) -> None:
    """List loaded layers in the order they were added."""
    config_store: store.Config = ctx.obj["config"]
    for identifier, _tree in config_store.layers:
        _click.echo(identifier)


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="confstrata")


if __name__ == "__main__":
    main()

"""Main Click group entry point for the boundlog CLI."""

from __future__ import annotations

import click
from pydantic import ValidationError
from rich.markup import escape

from boundlog import __version__
from boundlog.cli.emit_cmd import emit
from boundlog.cli.levels_cmd import levels


@click.group()
@click.version_option(__version__, prog_name="boundlog")
@click.option(
    "--config-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file to use instead of ~/.boundlog/config.toml",
)
@click.pass_context
def cli(ctx: click.Context, config_file: str | None) -> None:
    """boundlog: leveled logging to the console and a size-bounded file."""
    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file


def _make_config_group() -> click.Group:
    """Create the config subcommand group."""

    @click.group()
    def config() -> None:
        """View and modify boundlog configuration."""

    @config.command("show")
    @click.pass_context
    def config_show(ctx: click.Context) -> None:
        """Display current configuration."""
        from boundlog.config import CONFIG_FILE, load_config
        from boundlog.output.console import console

        config_file = ctx.obj.get("config_file") or CONFIG_FILE
        cfg = load_config(config_file)
        console.print(f"\n[header]boundlog configuration[/header] ({escape(str(config_file))})\n")
        for key, value in cfg.model_dump().items():
            console.print(f"  {key}: {value if value is not None else '-'}", markup=False)
        console.print()

    @config.command("set")
    @click.argument("key")
    @click.argument("value")
    @click.pass_context
    def config_set(ctx: click.Context, key: str, value: str) -> None:
        """Set a configuration value (e.g., 'log_level DEBUG')."""
        from boundlog.config import load_config, save_config
        from boundlog.models.config import LoggerConfig
        from boundlog.output.console import console, error_console

        config_file = ctx.obj.get("config_file")
        cfg = load_config(config_file)

        if key not in LoggerConfig.model_fields:
            error_console.print(f"[status.failed]Unknown key: {key}[/status.failed]")
            raise SystemExit(1)

        try:
            updated = LoggerConfig(**{**cfg.model_dump(), key: value})
        except ValidationError as e:
            error_console.print(f"Invalid value for {key}: {e}", style="status.failed", markup=False)
            raise SystemExit(1)

        save_config(updated, config_file)
        console.print(f"[status.success]Set {key} = {value}[/status.success]")

    return config


# Register subcommands
cli.add_command(levels)
cli.add_command(emit)
cli.add_command(_make_config_group(), "config")

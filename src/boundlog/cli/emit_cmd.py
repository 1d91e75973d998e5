"""Emit command: boundlog emit LEVEL MESSAGE."""

from __future__ import annotations

import click

from boundlog.output.console import error_console


@click.command()
@click.argument("level")
@click.argument("message")
@click.option("--path", type=click.Path(dir_okay=False), default=None, help="Log file to append to")
@click.option("--name", default=None, help="Caller label written in front of the record")
@click.option("--file-level", default=None, help="File threshold (name or rank)")
@click.option("--console-level", default=None, help="Console threshold (name or rank)")
@click.option("--max-size", type=int, default=None, help="Log file byte budget (<= 0 for unbounded)")
@click.pass_context
def emit(
    ctx: click.Context,
    level: str,
    message: str,
    path: str | None,
    name: str | None,
    file_level: str | None,
    console_level: str | None,
    max_size: int | None,
) -> None:
    """Write one record at LEVEL through a configured logger.

    Example: boundlog emit WARNING "disk almost full" --path logs/app.log
    """
    from boundlog.config import load_config
    from boundlog.core.logger import Logger
    from boundlog.exceptions import BoundlogError

    config_file = ctx.obj.get("config_file") if ctx.obj else None

    try:
        cfg = load_config(config_file)
        overrides = {
            "name": name,
            "path": path,
            "log_level": file_level,
            "command_window_level": console_level,
            "max_file_size": max_size,
        }
        cfg = cfg.model_validate({**cfg.model_dump(), **{k: v for k, v in overrides.items() if v is not None}})

        with Logger.from_config(cfg) as logger:
            logger.emit(_parse_level(level), cfg.name, message)
    except (BoundlogError, ValueError) as e:
        error_console.print(str(e), style="status.failed", markup=False)
        raise SystemExit(1)


def _parse_level(level: str) -> str | int:
    """Numeric arguments select a rank, anything else is a level name."""
    return int(level) if level.strip().isdigit() else level

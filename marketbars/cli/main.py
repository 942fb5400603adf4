"""Main entry point for the marketbars command line interface."""

from __future__ import annotations

from pathlib import Path

import typer

from marketbars.core.config.settings import ConfigManager, load_config_from_env
from marketbars.core.logging import configure_logging

from .bars import register as register_bar_commands
from .formatters import create_formatter


def create_app() -> typer.Typer:
    """Create a Typer application instance for marketbars."""

    app = typer.Typer(add_completion=False, help="marketbars command line interface")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option(
            "table",
            "--format",
            "-f",
            help="Output format (table or jsonl).",
            show_default=True,
        ),
        output: Path | None = typer.Option(
            None,
            "--output",
            "-o",
            help="Write output to a file instead of stdout.",
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            help="Logging level, overrides the configuration file.",
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output for table format.",
        ),
        config_path: Path | None = typer.Option(
            None,
            "--config",
            help="Path to a TOML configuration file.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        manager = ConfigManager(config_path)
        try:
            manager.update_config(**load_config_from_env())
        except (TypeError, ValueError) as exc:
            raise typer.BadParameter(f"Invalid environment configuration: {exc}") from exc
        config = manager.get_config()
        if log_level:
            manager.update_config(logging={"level": log_level.upper()})
            config = manager.get_config()

        ctx.obj.update(
            {
                "format": normalized_format,
                "output_path": output,
                "no_color": no_color,
                "config": config,
            }
        )
        try:
            configure_logging(
                config.logging.level,
                file_output=config.logging.file is not None,
                file_path=config.logging.file,
            )
        except ValueError as exc:
            raise typer.BadParameter(
                f"Unknown log level '{config.logging.level}'.", param_hint="--log-level"
            ) from exc

    register_bar_commands(app)
    return app


app = create_app()

import typer
from pathlib import Path
from typing import Optional, List

from ibc.config.loader import load_config, DEFAULT_CONFIG_PATH
from ibc.infrastructure.logging import setup_logging
from ibc.infrastructure.event_bus import EventBus
from ibc.infrastructure.file_scanner import FileScanner
from ibc.infrastructure.optipng import OptipngAdapter
from ibc.pipeline.orchestrator import Orchestrator
from ibc.domain.errors import ConfigurationError, BatchError, BatchInterruptedError
from ibc.ui.state import RunState
from ibc.ui.manager import UIManager
from ibc.ui.summary import Summary

app = typer.Typer(help="IBC (Image Batch Compression) - lossless PNG optimization with optipng")

@app.callback()
def main():
    """IBC (Image Batch Compression)."""

@app.command()
def compress(
    directories: Optional[List[Path]] = typer.Argument(None, help="Directories with PNG files (replaces configured list)"),
    config_path: Optional[Path] = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Path to YAML config"),
    level: Optional[int] = typer.Option(None, "--level", "-o", help="Override optimization level (0-7)"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write the log to this file"),
    terminate_on_timeout: bool = typer.Option(False, "--terminate-on-timeout", help="Kill optipng processes still running when the time budget runs out"),
    debug: bool = typer.Option(False, "--debug/--no-debug", help="Enable verbose debug logging")
):
    """Optimize every PNG directly inside the given directories."""
    try:
        config = load_config(config_path)
        # Apply CLI overrides
        if directories: config.general.directories = list(directories)
        if level is not None: config.general.level = level
        if terminate_on_timeout: config.general.terminate_on_timeout = True
        if debug: config.general.debug = True

        logger = setup_logging(log_file, debug=config.general.debug)
        logger.info(f"IBC started: directories={[str(d) for d in config.general.directories]}")
        logger.info(f"Config: level={config.general.level}, executable={config.tool.executable}, debug={config.general.debug}")

        bus = EventBus()
        state = RunState()
        UIManager(bus, state)

        scanner = FileScanner(suffix=config.general.suffix)
        optipng = OptipngAdapter(
            event_bus=bus,
            executable=config.tool.executable,
            level_flag=config.tool.level_flag
        )
        orchestrator = Orchestrator(
            config=config,
            event_bus=bus,
            file_scanner=scanner,
            optipng_adapter=optipng
        )

        orchestrator.run()
        Summary(state).print()

    except ConfigurationError as e:
        typer.secho(f"Configuration Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    except (KeyboardInterrupt, BatchInterruptedError):
        typer.echo("\nInterrupted by user")
        raise typer.Exit(code=130)

    except BatchError as e:
        # Show what finished and what was still running when the batch gave up
        Summary(state).print()
        typer.secho(f"Fatal Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    except Exception as e:
        typer.secho(f"Fatal Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

if __name__ == "__main__":
    app()

"""Main entry point for the stylepruner application.

Sets up the Typer CLI application, performs dependency injection (Composition
Root) and delegates execution to the CommandHandler. The CLI exposes exactly
one operation: fire the post-write hook for an output directory.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from stylepruner import __version__
from stylepruner.hooks import create_command_handler
from stylepruner.infrastructure.cli.display import ConsoleDisplay
from stylepruner.infrastructure.config.settings import (
    get_config,
    get_uncss_command,
    load_configuration,
    set_config,
)
from stylepruner.infrastructure.monitoring.logger_setup import (
    DEFAULT_LOG_FORMAT,
    level_from_name,
    setup_logging,
)

logger = logging.getLogger(__name__)

# --- Typer App Definition ---
app = typer.Typer(
    name="stylepruner",
    help="Strip unused CSS from the inline <style> blocks of a generated site using uncss.",
    add_completion=False,
)


def configure(config_file: Optional[Path], verbose: bool) -> None:
    """Loads settings and configures logging from them."""
    load_configuration(config_file=config_file, reload=True)
    level_name = "DEBUG" if verbose else str(get_config('logging.level', 'INFO'))
    setup_logging(
        log_level=level_from_name(level_name),
        log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
        log_file=get_config('logging.file'),
    )
    logger.info(f"stylepruner {__version__} configured.")


@app.command()
def prune(
    site_dir: Annotated[Path, typer.Argument(
        exists=True, file_okay=False, dir_okay=True, resolve_path=True,
        help="Output root of the generated site.")],
    config: Annotated[Optional[Path], typer.Option(
        "--config", "-c", exists=True, dir_okay=False,
        help="YAML settings file (defaults to ./stylepruner.yaml).")] = None,
    pattern: Annotated[Optional[str], typer.Option(
        "--pattern", help="Glob selecting pages below SITE_DIR.")] = None,
    concurrency: Annotated[Optional[int], typer.Option(
        "--concurrency", min=1, help="Number of pages processed at once.")] = None,
    strict: Annotated[bool, typer.Option(
        "--strict", help="Treat a non-zero uncss exit status as a failure.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """Prune unused CSS from every page under SITE_DIR, rewriting files in place."""
    configure(config, verbose)
    if pattern is not None:
        set_config('rewrite.file_pattern', pattern)
    if concurrency is not None:
        set_config('rewrite.concurrency', concurrency)
    if strict:
        set_config('rewrite.strict_exit_status', strict)

    ui = ConsoleDisplay()
    handler = create_command_handler(ui)
    # Check the analyzer the rewrite will use; it keeps the resolved command
    if not handler.site_rewriter.analyzer.is_installed():
        ui.display_error(
            f"'{' '.join(get_uncss_command())}' is not available. Install it with `npm install -g uncss` "
            "or set uncss.command."
        )
        raise typer.Exit(code=1)

    if not handler.handle_post_write(str(site_dir)):
        raise typer.Exit(code=1)


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()

"""CLI entrypoints: run the editor server, migrate legacy posts"""

import logging
import threading
import time
import webbrowser
from pathlib import Path
from typing import NamedTuple, Optional

import typer
import uvicorn
from typer.core import TyperGroup

from quickpost.main import create_app
from quickpost.services.migration import migrate_flat_posts
from quickpost.settings import FileConfig, Settings, load_file_config, settings

logger = logging.getLogger(__name__)

BROWSER_DELAY_SECONDS = 0.5
DEFAULT_COMMAND = "serve"


class ServeByDefault(TyperGroup):
    """
    Run `serve` unless the first argument names another command, so that
    `quickpost ./blog -p 8080` and `quickpost migrate ./blog` both work.
    """

    def parse_args(self, ctx, args):
        if not args or (
            args[0] not in self.commands and args[0] not in ctx.help_option_names
        ):
            args = [DEFAULT_COMMAND, *args]
        return super().parse_args(ctx, args)


app = typer.Typer(
    name="quickpost",
    cls=ServeByDefault,
    add_completion=False,
    help="Lightweight markdown editor for rapid blog post creation",
)


class RunOptions(NamedTuple):
    posts_dir: Path
    port: int
    open_browser: bool


def is_valid_port(port: int) -> bool:
    return 1 <= port <= 65535


def resolve_run_options(
    base: Settings,
    file_config: FileConfig,
    posts_dir: Optional[Path] = None,
    port: Optional[int] = None,
    no_open: bool = False,
) -> RunOptions:
    """CLI flags win over the config file, which wins over env settings."""
    if port is None:
        port = file_config.port if file_config.port is not None else base.PORT

    auto_open = (
        file_config.autoOpen if file_config.autoOpen is not None else base.AUTO_OPEN
    )
    directory = Path(posts_dir) if posts_dir else Path(base.POSTS_DIR)
    return RunOptions(
        posts_dir=directory.resolve(),
        port=port,
        open_browser=auto_open and not no_open,
    )


def open_browser(url: str) -> None:
    try:
        webbrowser.open(url)
    except webbrowser.Error as e:
        logger.error(f"Failed to open browser: {e}")


def _open_browser_later(url: str) -> None:
    def _run():
        time.sleep(BROWSER_DELAY_SECONDS)
        open_browser(url)

    threading.Thread(target=_run, daemon=True).start()


@app.command()
def serve(
    posts_dir: Optional[Path] = typer.Argument(
        None, help="Directory to store posts (default: ./posts)"
    ),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Server port"),
    no_open: bool = typer.Option(
        False, "--no-open", "-n", help="Don't automatically open the browser"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", help="JSON config file with port and autoOpen"
    ),
):
    """Start the QuickPost editor server."""
    started = time.perf_counter()

    file_config = load_file_config(config or settings.CONFIG_FILE)
    options = resolve_run_options(settings, file_config, posts_dir, port, no_open)
    if not is_valid_port(options.port):
        typer.echo(
            f"Invalid port: {options.port}. Port must be a number between 1 and 65535.",
            err=True,
        )
        raise typer.Exit(code=1)

    app_settings = settings.model_copy(
        update={"POSTS_DIR": str(options.posts_dir), "PORT": options.port}
    )
    application = create_app(app_settings)

    url = f"http://localhost:{options.port}"
    typer.echo(f"Starting QuickPost server on {url}")
    typer.echo(f"Using posts directory: {options.posts_dir}")

    if options.open_browser:
        _open_browser_later(url)

    logger.info(f"Ready in {(time.perf_counter() - started) * 1000:.0f}ms")
    uvicorn.run(
        application,
        host=app_settings.HOST,
        port=options.port,
        log_level=app_settings.LOG_LEVEL.lower(),
    )


@app.command()
def migrate(
    posts_dir: Optional[Path] = typer.Argument(
        None, help="Posts directory holding legacy <slug>.md files"
    ),
):
    """Move legacy flat <slug>.md posts into per-post folders."""
    directory = (posts_dir or Path(settings.POSTS_DIR)).resolve()
    migrated = migrate_flat_posts(directory)
    if not migrated:
        typer.echo("Nothing to migrate")
        return
    for slug in migrated:
        typer.echo(f"Migrated {slug}")

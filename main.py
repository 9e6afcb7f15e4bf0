"""CLI entry point for the LinkedIn job board."""

import asyncio
import logging
import sys

from src.browser.launcher import BrowserLauncher
from src.core.config import SearchParameters, Settings
from src.core.resolver import CommandLine, parse_command_line, resolve_parameters
from src.pipeline.startup import OutcomeCell, StartupFetch
from src.platforms.linkedin.client import LinkedInClient
from src.web.app import create_app
from src.web.server import build_server, serve

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(cli: CommandLine) -> Settings:
    """Settings from --config (if given) with the PORT environment override applied."""
    settings = Settings.from_yaml(cli.config_path) if cli.config_path else Settings()
    return settings.model_copy(update={"server": settings.server.with_env()})


async def run(settings: Settings, params: SearchParameters, open_browser: bool) -> None:
    """Serve the page and run the startup search once the server is listening."""
    cell = OutcomeCell()
    launcher = BrowserLauncher(settings.server.base_url, enabled=open_browser)
    app = create_app(cell.reader(), params)

    async with LinkedInClient(settings.linkedin) as client:
        startup = StartupFetch(client, params, cell, on_settled=launcher.open)
        await serve(build_server(app, settings.server), startup, settings.server)


def main(argv: list[str] | None = None) -> None:
    cli = parse_command_line(sys.argv[1:] if argv is None else argv)
    setup_logging(cli.verbose)
    for warning in cli.warnings:
        logger.warning(warning)

    try:
        settings = load_settings(cli)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    params = resolve_parameters(cli.overrides, settings.search)
    asyncio.run(run(settings, params, cli.open_browser))


if __name__ == "__main__":
    main()

import functools
import logging
import sys

import click

from .common.config import load_config
from .exceptions import SpotifyStatusException
from .mpris import DEFAULT_PLAYER, DEFAULT_TIMEOUT_SECONDS, MprisMetadataSource
from .now_playing import render_now_playing

logger = logging.getLogger(__name__)


def global_options(f):
    """Decorator to apply global options to a command."""
    options = [
        click.option(
            "--log-level",
            default="WARNING",
            type=click.Choice(
                ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
            ),
            help="Set the logging level. Logs go to stderr.",
        )
    ]
    return functools.reduce(lambda x, opt: opt(x), options, f)


@click.command()
@global_options
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar="SPOTIFY_STATUS_CONFIG",
    default=None,
    help="Path to the TOML config file (default: ~/.spotify-status)",
)
@click.option(
    "--player",
    "-p",
    default=DEFAULT_PLAYER,
    show_default=True,
    help="MPRIS player name, as in org.mpris.MediaPlayer2.<player>",
)
@click.option(
    "--timeout",
    "-t",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT_SECONDS,
    show_default=True,
    help="Seconds to wait for the player to answer",
)
def cli(log_level: str, config_path: str, player: str, timeout: float):
    """Print the currently playing track as markup for a status bar."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config(config_path)
        line = render_now_playing(
            config, MprisMetadataSource(player=player, timeout=timeout)
        )
    except SpotifyStatusException as e:
        logger.debug("Failed to render now playing", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(line, nl=False)

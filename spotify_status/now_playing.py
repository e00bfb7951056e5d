import logging

from .common.config import Config
from .common.markup import format_for_printing
from .common.titles import remove_feat
from .exceptions import MetadataUnavailableException
from .models import MetadataSource, TrackMetadata

logger = logging.getLogger(__name__)


def compose_display_text(track: TrackMetadata, config: Config) -> str:
    """
    Build "<title> (by <first artist>)".

    The feat suffix is removed from the title before the artist is appended,
    so the pattern never sees the "(by ...)" part.
    """
    if not track.artists:
        raise MetadataUnavailableException("Track has no artists")

    title = remove_feat(track.title, config)
    return f"{title} (by {track.artists[0]})"


def render_now_playing(config: Config, source: MetadataSource) -> str:
    """Fetch the current track from `source` and return the status bar line."""
    track = source.get_track()
    logger.debug(f"Now playing: {track.title!r} by {track.artists!r}")
    return format_for_printing(config, compose_display_text(track, config))

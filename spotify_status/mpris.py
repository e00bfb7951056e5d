import asyncio
import logging
from typing import Any, Mapping

from dbus_fast import BusType, Message, MessageType, Variant
from dbus_fast.aio import MessageBus
from dbus_fast.errors import AuthError, DBusError, InvalidAddressError

from .exceptions import MetadataUnavailableException, PlayerNotRunningException
from .models import TrackMetadata

logger = logging.getLogger(__name__)

MPRIS_BUS_NAME_PREFIX = "org.mpris.MediaPlayer2."
MEDIA_INTERFACE_PATH = "/org/mpris/MediaPlayer2"
MPRIS_MEDIA_INTERFACE = "org.mpris.MediaPlayer2.Player"
PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"
MEDIA_METADATA_PROP = "Metadata"
TITLE_PROPERTY = "xesam:title"
ARTISTS_PROPERTY = "xesam:artist"

DEFAULT_PLAYER = "spotify"
DEFAULT_TIMEOUT_SECONDS = 5.0

PLAYER_MISSING_ERRORS = (
    "org.freedesktop.DBus.Error.ServiceUnknown",
    "org.freedesktop.DBus.Error.NameHasNoOwner",
)


def _unwrap(value: Any) -> Any:
    return value.value if isinstance(value, Variant) else value


def parse_metadata(metadata: Mapping[str, Any]) -> TrackMetadata:
    """
    Pull the title and artist list out of an MPRIS Metadata dict.

    Values may be raw or still wrapped in dbus Variants.
    """
    title = _unwrap(metadata.get(TITLE_PROPERTY))
    if not isinstance(title, str):
        raise MetadataUnavailableException(
            f"Player metadata has no usable {TITLE_PROPERTY} (got {title!r})"
        )

    artists = _unwrap(metadata.get(ARTISTS_PROPERTY))
    if not isinstance(artists, list) or not all(isinstance(a, str) for a in artists):
        raise MetadataUnavailableException(
            f"Player metadata has no usable {ARTISTS_PROPERTY} (got {artists!r})"
        )
    if not artists:
        raise MetadataUnavailableException("Player metadata lists no artists")

    return TrackMetadata(title=title, artists=list(artists))


class MprisMetadataSource:
    """Reads the current track of an MPRIS player on the session bus."""

    def __init__(
        self,
        player: str = DEFAULT_PLAYER,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        bus_type: BusType = BusType.SESSION,
    ):
        self.player = player
        self.timeout = timeout
        self.bus_type = bus_type

    @property
    def bus_name(self) -> str:
        return MPRIS_BUS_NAME_PREFIX + self.player

    def get_track(self) -> TrackMetadata:
        metadata = asyncio.run(self._fetch_metadata())
        return parse_metadata(metadata)

    async def _fetch_metadata(self) -> Mapping[str, Any]:
        logger.debug(f"Querying {self.bus_name} for {MEDIA_METADATA_PROP}")
        try:
            bus = await asyncio.wait_for(
                MessageBus(bus_type=self.bus_type).connect(), self.timeout
            )
        except asyncio.TimeoutError as e:
            raise MetadataUnavailableException(
                f"Timed out after {self.timeout}s connecting to the session bus"
            ) from e
        except (OSError, AuthError, InvalidAddressError, DBusError) as e:
            raise MetadataUnavailableException(
                f"Could not connect to the session bus: {e}"
            ) from e

        try:
            reply = await asyncio.wait_for(
                bus.call(
                    Message(
                        destination=self.bus_name,
                        path=MEDIA_INTERFACE_PATH,
                        interface=PROPERTIES_INTERFACE,
                        member="Get",
                        signature="ss",
                        body=[MPRIS_MEDIA_INTERFACE, MEDIA_METADATA_PROP],
                    )
                ),
                self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise MetadataUnavailableException(
                f"Timed out after {self.timeout}s waiting for {self.bus_name}"
            ) from e
        except (OSError, DBusError) as e:
            raise MetadataUnavailableException(
                f"Querying {self.bus_name} failed: {e}"
            ) from e
        finally:
            bus.disconnect()

        if reply.message_type == MessageType.ERROR:
            detail = reply.body[0] if reply.body else ""
            if reply.error_name in PLAYER_MISSING_ERRORS:
                raise PlayerNotRunningException(
                    f"{self.player} is not running ({self.bus_name} is not on the bus)"
                )
            raise MetadataUnavailableException(
                f"{self.bus_name} returned {reply.error_name}: {detail}"
            )

        metadata = _unwrap(reply.body[0]) if reply.body else None
        if not isinstance(metadata, Mapping):
            raise MetadataUnavailableException(
                f"{self.bus_name} returned unexpected {MEDIA_METADATA_PROP}: {metadata!r}"
            )
        return metadata

import asyncio
from unittest.mock import AsyncMock

import pytest
from dbus_fast import MessageType, Variant

from spotify_status.exceptions import (
    MetadataUnavailableException,
    PlayerNotRunningException,
)
from spotify_status.models import TrackMetadata
from spotify_status.mpris import MprisMetadataSource, parse_metadata


def metadata_variant(title="Song", artists=("Artist",)):
    return Variant(
        "a{sv}",
        {
            "xesam:title": Variant("s", title),
            "xesam:artist": Variant("as", list(artists)),
            "xesam:album": Variant("s", "Album"),
        },
    )


@pytest.fixture
def bus(mocker):
    """A connected bus whose Get call returns a metadata dict."""
    bus = mocker.Mock()
    bus.call = AsyncMock(
        return_value=mocker.Mock(
            message_type=MessageType.METHOD_RETURN, body=[metadata_variant()]
        )
    )
    message_bus = mocker.patch("spotify_status.mpris.MessageBus")
    message_bus.return_value.connect = AsyncMock(return_value=bus)
    return bus


def test_parse_metadata_unwraps_variants():
    track = parse_metadata(metadata_variant("Title", ["A", "B"]).value)
    assert track == TrackMetadata(title="Title", artists=["A", "B"])


def test_parse_metadata_plain_values():
    track = parse_metadata({"xesam:title": "Title", "xesam:artist": ["A"]})
    assert track == TrackMetadata(title="Title", artists=["A"])


@pytest.mark.parametrize(
    "metadata",
    [
        {},
        {"xesam:artist": ["A"]},
        {"xesam:title": "Title"},
        {"xesam:title": "Title", "xesam:artist": []},
        {"xesam:title": "Title", "xesam:artist": "A"},
        {"xesam:title": 42, "xesam:artist": ["A"]},
        {"xesam:title": "Title", "xesam:artist": [1, 2]},
    ],
)
def test_parse_metadata_rejects_incomplete(metadata):
    with pytest.raises(MetadataUnavailableException):
        parse_metadata(metadata)


def test_get_track(bus):
    source = MprisMetadataSource()
    track = source.get_track()

    assert track == TrackMetadata(title="Song", artists=["Artist"])
    message = bus.call.call_args[0][0]
    assert message.destination == "org.mpris.MediaPlayer2.spotify"
    assert message.path == "/org/mpris/MediaPlayer2"
    assert message.interface == "org.freedesktop.DBus.Properties"
    assert message.member == "Get"
    assert message.body == ["org.mpris.MediaPlayer2.Player", "Metadata"]
    bus.disconnect.assert_called_once()


def test_get_track_other_player(bus):
    source = MprisMetadataSource(player="vlc")
    source.get_track()

    assert bus.call.call_args[0][0].destination == "org.mpris.MediaPlayer2.vlc"


def test_player_not_running(bus, mocker):
    bus.call.return_value = mocker.Mock(
        message_type=MessageType.ERROR,
        error_name="org.freedesktop.DBus.Error.ServiceUnknown",
        body=["The name org.mpris.MediaPlayer2.spotify was not provided"],
    )

    with pytest.raises(PlayerNotRunningException, match="spotify is not running"):
        MprisMetadataSource().get_track()
    bus.disconnect.assert_called_once()


def test_other_dbus_error(bus, mocker):
    bus.call.return_value = mocker.Mock(
        message_type=MessageType.ERROR,
        error_name="org.freedesktop.DBus.Error.InvalidArgs",
        body=["No such property"],
    )

    with pytest.raises(MetadataUnavailableException, match="InvalidArgs"):
        MprisMetadataSource().get_track()


def test_empty_metadata(bus, mocker):
    bus.call.return_value = mocker.Mock(
        message_type=MessageType.METHOD_RETURN, body=[Variant("a{sv}", {})]
    )

    with pytest.raises(MetadataUnavailableException):
        MprisMetadataSource().get_track()


def test_call_timeout(bus):
    bus.call.side_effect = asyncio.TimeoutError()

    with pytest.raises(MetadataUnavailableException, match="Timed out"):
        MprisMetadataSource(timeout=0.1).get_track()
    bus.disconnect.assert_called_once()


def test_no_session_bus(mocker):
    message_bus = mocker.patch("spotify_status.mpris.MessageBus")
    message_bus.return_value.connect = AsyncMock(
        side_effect=FileNotFoundError("no socket")
    )

    with pytest.raises(MetadataUnavailableException, match="session bus"):
        MprisMetadataSource().get_track()

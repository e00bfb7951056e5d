from dataclasses import dataclass, field
from typing import List, Protocol


@dataclass(frozen=True)
class TrackMetadata:
    """What the player reports as currently playing."""

    title: str
    artists: List[str] = field(default_factory=list)


class MetadataSource(Protocol):
    """Anything that can tell us the current track."""

    def get_track(self) -> TrackMetadata:
        """
        Return the current track.

        Raises:
            MetadataUnavailableException: if there is no usable track.
        """
        ...

"""Print the track playing in Spotify as markup for a status bar."""

__version__ = "0.1.0"

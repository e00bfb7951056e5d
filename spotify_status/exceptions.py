class SpotifyStatusException(Exception):
    """Base exception for all spotify-status errors."""

    pass


class HomeDirectoryNotFoundException(SpotifyStatusException):
    """The home directory of the current user could not be resolved."""

    pass


class ConfigurationException(SpotifyStatusException):
    """Base exception for errors in the user configuration."""

    pass


class ConfigFileUnreadableException(ConfigurationException):
    """The config file exists but could not be opened or read."""

    pass


class ConfigParseException(ConfigurationException):
    """The config file is not valid TOML or holds invalid values."""

    pass


class InvalidFeatPatternException(ConfigurationException):
    """The configured feat_regex does not compile."""

    pass


class MetadataUnavailableException(SpotifyStatusException):
    """The player did not return usable now playing metadata."""

    pass


class PlayerNotRunningException(MetadataUnavailableException):
    """The media player is not present on the bus."""

    pass

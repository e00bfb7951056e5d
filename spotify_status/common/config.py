import logging
import os
from typing import Any, Mapping, Optional

import toml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import (
    ConfigFileUnreadableException,
    ConfigParseException,
    HomeDirectoryNotFoundException,
)

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".spotify-status"

SPOTIFY_ICON_AWESOME_FONTS = "&#xf1bc;"
DEFAULT_COLOR = "white"
DEFAULT_MAX_LENGTH = 45
DEFAULT_REMOVE_FEAT = False
DEFAULT_FEAT_REGEX = r"\(feat\. [\w* ]*\)"


class Config(BaseModel):
    """
    User configuration. Every field has its own default, so a config file
    only needs the keys it wants to change.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    icon: str = SPOTIFY_ICON_AWESOME_FONTS
    color: str = DEFAULT_COLOR
    max_length: int = Field(default=DEFAULT_MAX_LENGTH, ge=0)
    remove_feat: bool = DEFAULT_REMOVE_FEAT
    feat_regex: str = DEFAULT_FEAT_REGEX


def merge_config(overrides: Optional[Mapping[str, Any]] = None) -> Config:
    """
    Build a Config from the defaults, replacing only the fields present in
    `overrides`. Keys explicitly set to None keep their default.
    """
    values = {k: v for k, v in (overrides or {}).items() if v is not None}
    try:
        return Config.model_validate(values)
    except ValidationError as e:
        # Report the first field error only, the rest are usually noise.
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "config"
        raise ConfigParseException(
            f"Failed to parse the configuration file: {field}: {first['msg']}"
        ) from e


def default_config_path() -> str:
    home_dir = os.path.expanduser("~")
    # expanduser leaves "~" untouched when no home can be determined
    if not home_dir or home_dir == "~":
        raise HomeDirectoryNotFoundException(
            "Could not find the home directory of the current user"
        )
    return os.path.join(home_dir, CONFIG_FILE_NAME)


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load the TOML config file at `config_path` (default ~/.spotify-status).

    A missing file means all defaults. A file that exists but cannot be read
    or parsed raises a ConfigurationException subclass.
    """
    if config_path is None:
        config_path = default_config_path()

    if not os.path.exists(config_path):
        logger.debug(f"No config file at {config_path}, using defaults")
        return Config()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = toml.load(f)
    except toml.TomlDecodeError as e:
        raise ConfigParseException(
            f"Failed to parse the configuration file: {e}"
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileUnreadableException(
            f"Unable to open the config file but it exists: {config_path}: {e}"
        ) from e

    logger.debug(f"Loaded config keys {sorted(data)} from {config_path}")
    return merge_config(data)

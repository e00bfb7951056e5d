"""Title cleanup and truncation for the status bar text."""

import re

from .config import DEFAULT_FEAT_REGEX, Config
from ..exceptions import InvalidFeatPatternException

ELLIPSIS = "..."


def remove_feat(title: str, config: Config) -> str:
    """
    Strip "featuring" annotations such as "(feat. Someone)" from a title.

    Does nothing unless `remove_feat` is enabled. Every match of `feat_regex`
    is removed and the result is stripped of surrounding whitespace.

    Raises:
        InvalidFeatPatternException: if `feat_regex` is not a valid pattern.
    """
    if not config.remove_feat:
        return title

    pattern = config.feat_regex or DEFAULT_FEAT_REGEX
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise InvalidFeatPatternException(
            f"Invalid feat_regex {pattern!r}: {e}"
        ) from e

    return regex.sub("", title).strip()


def trim_to_length(text: str, max_length: int) -> str:
    """
    Shorten `text` to `max_length` characters by replacing its middle with
    "...", so both the start and the end stay readable.

    When the ellipsis itself does not fit, the text is simply cut.
    """
    if len(text) <= max_length:
        return text

    if max_length < len(ELLIPSIS):
        return text[:max(max_length, 0)]

    diff = len(text) - max_length + len(ELLIPSIS)
    mid = len(text) // 2

    # An odd diff takes the extra character from the end.
    pre = text[: mid - diff // 2]
    post = text[mid + (diff - diff // 2) :]

    return f"{pre}{ELLIPSIS}{post}"

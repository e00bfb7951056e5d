import html

from .config import Config
from .titles import trim_to_length


def escape_markup(text: str) -> str:
    """Escape &, <, >, " and ' so the text can sit inside a Pango span."""
    return html.escape(text, quote=True)


def format_for_printing(config: Config, display_str: str) -> str:
    """Wrap the truncated, escaped display string in a colored span."""
    sized_display_str = trim_to_length(display_str, config.max_length)
    displayable_text = escape_markup(sized_display_str)

    # icon is inserted as-is, the default is itself a markup entity
    return f'<span color="{config.color}">{config.icon} {displayable_text}</span>'

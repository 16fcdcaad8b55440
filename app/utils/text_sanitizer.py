import re

# Characters with meaning in Telegram's legacy Markdown parse mode
_MARKDOWN_CHARS = re.compile(r"[*_`\[\]]")


def safe_text(value: object) -> str:
    """Strip Markdown control characters from user-controlled text.

    Keeps a sender's name or a stored detail from opening an unterminated
    emphasis/code span (which makes Telegram reject the whole message) or
    injecting links. ``None`` renders as an empty string.

    Args:
        value: Text to interpolate into a reply.

    Returns:
        str: Text without ``*``, ``_``, backticks and square brackets.
    """
    if value is None:
        return ""
    return _MARKDOWN_CHARS.sub("", str(value))


def split_command(text: str) -> list[str]:
    """Split trimmed message text on runs of whitespace.

    Empty text yields a single empty token so callers can always read the
    first element.
    """
    parts = text.strip().split()
    return parts or [""]

import re

_SCRIPT_TAG = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)


def sanitize_input(text: str) -> str:
    """Strip ``<script>`` blocks and surrounding whitespace from user text.

    Args:
        text: Raw query parameter value.

    Returns:
        str: Text without script blocks, trimmed.
    """
    return _SCRIPT_TAG.sub("", text).strip()


def normalize_whitespace(text: str) -> str:
    """Standardize line breaks and collapse runs of spaces/tabs and blank lines."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()

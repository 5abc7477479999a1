import re

_DIGITS_PATTERN = re.compile(r"\d+")


def normalize_key(key: str) -> str:
    """Lowercase a ``Key Name:`` label and drop all whitespace."""
    return re.sub(r"\s+", "", key.strip().lower())


def parse_int(text: str) -> int:
    """Return the first run of digits as an int, or 0."""
    m = _DIGITS_PATTERN.search(text or "")
    return int(m.group(0)) if m else 0


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())

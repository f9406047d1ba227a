import re


_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_term(text: str) -> str:
    """
    Normalize a symptom or condition string for catalog lookups.

    Lowercases, strips punctuation and collapses whitespace, so
    " Chest-Pain! " and "chestpain" map to the same key. Never raises.
    """
    if not text:
        return ""
    cleaned = _PUNCTUATION_RE.sub("", str(text).lower())
    return _WHITESPACE_RE.sub(" ", cleaned).strip()

"""Text utilities for cleaning verse text from remote sources."""
import re

_LINE_BREAKS = re.compile(r"\r?\n")


def normalize_verse_text(text: str) -> str:
    """Collapse embedded line breaks to single spaces and trim the result."""
    return _LINE_BREAKS.sub(" ", text).strip()

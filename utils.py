# utils.py

import re

from engine import InvalidInput

_SEPARATORS = re.compile(r"[,\s]+")


def parse_reference_string(text):
    """Turn '7, 0 1,2' into [7, 0, 1, 2]; blank tokens are skipped."""
    pages = []
    for token in _SEPARATORS.split(text.strip()):
        if token == "":
            continue
        try:
            page = int(token)
        except ValueError:
            raise InvalidInput(f"'{token}' is not a page number") from None
        if page < 0:
            raise InvalidInput(f"page numbers cannot be negative: {token}")
        pages.append(page)
    return pages


def format_reference_string(pages):
    return ",".join(str(p) for p in pages)


def get_color(frame, step):
    """Return a bar color for a frame in the given step."""
    if frame.is_empty:
        return "lightgray"
    if frame.page == step.reference:
        # freshly loaded on a fault, found on a hit
        return "#fcd34d" if step.is_fault else "lightgreen"
    return "#bfdbfe"

"""Block segmentation: split markdown on blank lines"""

import re


BLANK_LINE_RE = re.compile(r"\n[ \t]*\n")


def split_blocks(markdown: str) -> list[str]:
    """Return trimmed, non-empty block candidates in source order."""
    text = markdown.replace("\r\n", "\n").replace("\r", "\n")
    return [b.strip() for b in BLANK_LINE_RE.split(text) if b.strip()]

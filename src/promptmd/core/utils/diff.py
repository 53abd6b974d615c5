"""Compare a prompt script with what parse -> serialize made of it"""

import difflib


def diff_summary(source: str, rendered: str) -> dict[str, int]:
    """Count lines the round trip added, deleted, or left alone."""
    matcher = difflib.SequenceMatcher(None, source.splitlines(), rendered.splitlines())
    counts = {"added": 0, "deleted": 0, "unchanged": 0}
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            counts["unchanged"] += i2 - i1
            continue
        counts["deleted"] += i2 - i1
        counts["added"] += j2 - j1
    return counts


def unified_diff(
    source: str,
    rendered: str,
    source_label: str = "input",
    rendered_label: str = "roundtrip",
    context: int = 3,
    ) -> list[str]:
    """Diff lines ready to print as-is; empty when the script survived unchanged."""
    return list(difflib.unified_diff(
        source.splitlines(keepends=True),
        rendered.splitlines(keepends=True),
        fromfile=source_label,
        tofile=rendered_label,
        n=context,
    ))

"""Chapter range parsing ("1-2", "3", "1-2,4")."""


def _to_int(value: str) -> int | None:
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_chapters(spec: str | None) -> list[int]:
    """Expand a chapter range string into chapter numbers.

    Segments are comma separated. A segment with a hyphen is an inclusive
    range; a reversed or malformed segment contributes nothing instead of
    raising, so a bad entry in the plan only hides chapters.
    """
    if not spec:
        return []

    chapters: list[int] = []
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue

        if "-" in part:
            start_str, _, end_str = part.partition("-")
            start = _to_int(start_str)
            end = _to_int(end_str)
            if start is None or end is None or start > end:
                continue
            chapters.extend(range(start, end + 1))
        else:
            number = _to_int(part)
            if number is not None:
                chapters.append(number)

    return chapters

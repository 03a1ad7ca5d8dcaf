from __future__ import annotations


def title_variations(title: str) -> list[str]:
    """Return *title* followed by progressively shorter lookup candidates.

    Disc labels often carry suffixes (``MOVIE_TITLE_2023``, ``SHOW_DISC_1``)
    that break metadata searches.  Each step cuts the current candidate at
    its last non-alphanumeric character, trimming trailing whitespace first.

    >>> title_variations("Movie-Title_Part 2023")
    ['Movie-Title_Part 2023', 'Movie-Title_Part', 'Movie-Title', 'Movie']
    """
    variations = [title]
    current = title.rstrip()

    while True:
        cut = _last_separator(current)
        if cut <= 0:
            break
        current = current[:cut].rstrip()
        if current and current not in variations:
            variations.append(current)

    return variations


def _last_separator(text: str) -> int:
    for i in range(len(text) - 1, -1, -1):
        if not text[i].isalnum():
            return i
    return -1

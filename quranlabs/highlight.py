# quranlabs/highlight.py
from typing import List, Tuple

from colorama import Fore, Style


def highlight_query(source: str, query: str, color: str = Fore.RED) -> str:
    """
    Colour every case-insensitive occurrence of each query word in `source`.

    Short queries (2 characters or fewer) are not highlighted, matching the
    minimum search length.
    """
    if not source or not query or len(query) <= 2:
        return source

    lower_source = source.lower()
    if len(lower_source) != len(source):
        # Offsets would not line up (e.g. "İ" lowers to two characters)
        return source
    spans: List[Tuple[int, int]] = []
    for word in (w.lower() for w in query.split(" ") if w):
        start = lower_source.find(word)
        while start != -1:
            spans.append((start, start + len(word)))
            start = lower_source.find(word, start + len(word))

    if not spans:
        return source

    # Merge overlapping spans so colour codes never nest
    spans.sort()
    merged = [spans[0]]
    for start, end in spans[1:]:
        last_start, last_end = merged[-1]
        if start <= last_end:
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))

    pieces = []
    cursor = 0
    for start, end in merged:
        pieces.append(source[cursor:start])
        pieces.append(f"{color}{source[start:end]}{Style.RESET_ALL}")
        cursor = end
    pieces.append(source[cursor:])
    return "".join(pieces)

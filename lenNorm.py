from tagTypes import FILLER_PATTERN, FILL_MARKER
from blockMap import BlockMap, DEFAULT_MAP


def normalize(text: str, block_map: BlockMap = DEFAULT_MAP) -> str:
    """
    Bring a record's length into [block_map.min_len, block_map.capacity].

    Short records get the fill marker and then whole copies of the filler
    pattern until they reach min_len, so they may end up to
    len(FILLER_PATTERN) - 1 chars past it. Long records are cut at exactly
    capacity, wherever that falls.

    Args:
        text: The record to normalize.
        block_map: Supplies the bounds.

    Returns:
        str: The normalized record; unchanged if already within bounds.
    """
    if len(text) < block_map.min_len:
        parts = [text, FILL_MARKER]
        length = len(text) + len(FILL_MARKER)
        while length < block_map.min_len:
            parts.append(FILLER_PATTERN)
            length += len(FILLER_PATTERN)
        text = ''.join(parts)

    if len(text) > block_map.capacity:
        text = text[:block_map.capacity]

    return text

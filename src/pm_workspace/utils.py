from __future__ import annotations

import math
from typing import Any, Dict, List


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round halves away from the lower neighbour (2.5 -> 3, 0.25 -> 0.3 at one
    digit), unlike the built-in round() which rounds halves to even.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def page_count(total: int, page_size: int) -> int:
    """Number of pages needed for total items; 0 when page_size is not positive."""
    if page_size < 1 or total <= 0:
        return 0
    return math.ceil(total / page_size)


# PUBLIC_INTERFACE
def document_page(items: List[Any], total: int, page: int, page_size: int) -> Dict[str, Any]:
    """
    Wrap one page of documents with its position in the collection.

    Keys: items, total, page, page_size, pages. `pages` is the number of
    non-empty pages at this page_size, so `page > pages` means the request
    fell past the end.
    """
    return {
        "items": items,
        "total": total,
        "page": page,
        "page_size": max(page_size, 0),
        "pages": page_count(total, page_size),
    }

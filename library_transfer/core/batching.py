from typing import List, Sequence, TypeVar

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    """
    Split items into consecutive batches of at most `size` elements.

    Order is preserved and only the last batch may be shorter:
      chunk([1, 2, 3, 4, 5], 2) -> [[1, 2], [3, 4], [5]]
    """
    if size < 1:
        raise ValueError(f"Batch size must be >= 1, got {size}.")

    return [list(items[i : i + size]) for i in range(0, len(items), size)]

from typing import Iterator, Tuple


def square_outline(top_left_x: int, top_left_y: int, side_length: int) -> Iterator[Tuple[int, int]]:
    """
    Walk the perimeter of a square clockwise, starting at its top-left corner.

    Yields 4 * (side_length - 1) points, each perimeter cell exactly once.
    Squares with a side shorter than 2 have no outline to walk.

    >>> list(square_outline(0, 0, 2))
    [(0, 0), (1, 0), (1, 1), (0, 1)]
    """
    if side_length < 2:
        return
    last = side_length - 1
    for index in range(4 * last):
        side, offset = divmod(index, last)
        if side == 0:
            dx, dy = offset, 0
        elif side == 1:
            dx, dy = last, offset
        elif side == 2:
            dx, dy = last - offset, last
        else:
            dx, dy = 0, last - offset
        yield top_left_x + dx, top_left_y + dy

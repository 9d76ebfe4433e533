from typing import Dict, List, Optional, Tuple

CellGrid = List[List[bool]]
Pattern = List[Tuple[int, int]]

PATTERN_LIBRARY: Dict[str, Pattern] = {
    "blinker": [(0, 0), (0, 1), (0, 2)],
    "block": [(0, 0), (0, 1), (1, 0), (1, 1)],
    "beehive": [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 2)],
    "toad": [(0, 1), (0, 2), (0, 3), (1, 0), (1, 1), (1, 2)],
    "beacon": [(0, 0), (0, 1), (1, 0), (2, 3), (3, 2), (3, 3)],
    "glider": [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)],
}

LIVE_CHARS = "O*"
DEAD_CHARS = "."


def place_pattern(
    rows: int,
    cols: int,
    pattern: Pattern,
    top: Optional[int] = None,
    left: Optional[int] = None,
) -> CellGrid:
    """Return an empty board with the pattern stamped on it (centered by default)."""
    board = [[False] * cols for _ in range(rows)]
    if not pattern:
        return board

    height = max(r for r, _ in pattern) + 1
    width = max(c for _, c in pattern) + 1
    if top is None:
        top = (rows - height) // 2
    if left is None:
        left = (cols - width) // 2

    for r_offset, c_offset in pattern:
        r, c = top + r_offset, left + c_offset
        if 0 <= r < rows and 0 <= c < cols:
            board[r][c] = True
    return board


def parse_plaintext(text: str) -> CellGrid:
    """
    Parse a board in Life plaintext format.

    Lines starting with '!' are comments, 'O' or '*' marks a live cell and
    '.' a dead one. Rows shorter than the longest are padded with dead cells.
    """
    rows: CellGrid = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if line.startswith("!"):
            continue
        row = []
        for char in line.rstrip():
            if char in LIVE_CHARS:
                row.append(True)
            elif char in DEAD_CHARS:
                row.append(False)
            else:
                raise ValueError(f"Unexpected character {char!r} on line {lineno}.")
        rows.append(row)

    while rows and not rows[-1]:
        rows.pop()
    if not rows:
        raise ValueError("Pattern contains no cells.")

    width = max(len(row) for row in rows)
    if width == 0:
        raise ValueError("Pattern contains no cells.")
    return [row + [False] * (width - len(row)) for row in rows]


def load_plaintext(path: str) -> CellGrid:
    """Read a plaintext pattern file."""
    with open(path, "r", encoding="utf-8") as f:
        return parse_plaintext(f.read())


def count_alive(board: CellGrid) -> int:
    return sum(cell for row in board for cell in row)

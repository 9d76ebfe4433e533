from typing import List

from utils import CellGrid

VALID_HEADER_KEYWORDS = {"mode", "size", "gen", "alive", "history"}


def build_header(
    board: CellGrid,
    epochs: int,
    alive: int,
    torus: bool,
    history: int,
    header_items: str,
) -> str:
    """Build the one-line status header from a comma-separated keyword list."""
    items_to_show = {item.strip() for item in header_items.lower().split(",") if item.strip()}
    header_parts: List[str] = []

    if "mode" in items_to_show:
        header_parts.append("[Torus]" if torus else "[Bounded]")

    if "size" in items_to_show:
        rows, cols = len(board), len(board[0]) if board else 0
        header_parts.append(f"Size: {cols}x{rows}")

    if "gen" in items_to_show:
        header_parts.append(f"Generation {epochs}")

    if "alive" in items_to_show:
        header_parts.append(f"Alive {alive}")

    if "history" in items_to_show:
        header_parts.append(f"History {history}")

    return " | ".join(header_parts)


def render(
    board: CellGrid,
    epochs: int,
    alive: int,
    live_cell: str,
    dead_cell: str,
    torus: bool = False,
    history: int = 0,
    header_items: str = "gen",
) -> None:
    """Render the current board state to the terminal."""
    # ANSI escape code to move cursor to top-left and clear screen
    output_buffer = ["\x1b[H\x1b[J"]

    header = build_header(board, epochs, alive, torus, history, header_items)
    if header:
        output_buffer.append(header)
        output_buffer.append("-" * len(header))

    for row in board:
        output_buffer.append("".join(live_cell if cell else dead_cell for cell in row))

    print("\n".join(output_buffer), flush=True)


def render_results(epochs: int, reason: str) -> None:
    """Render the final results in a formatted box."""
    title = "Game Over"
    stats = [
        reason,
        f"Epochs: {epochs}",
    ]

    width = max(len(s) for s in stats)
    width = max(width, len(title))

    print("\n")
    print(f"┌{'─' * (width + 2)}┐")
    print(f"│ {title.center(width)} │")
    print(f"├{'─' * (width + 2)}┤")
    for stat in stats:
        print(f"│ {stat.ljust(width)} │")
    print(f"└{'─' * (width + 2)}┘")

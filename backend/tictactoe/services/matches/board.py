from typing import Optional, Sequence

from tictactoe.models import DRAW

# Rows top-to-bottom, columns left-to-right, then both diagonals
WINNING_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


def check_winner(board: Sequence) -> Optional[str]:
    """Classify a 9-cell board.

    Returns the mark of the first fully-matched line, ``DRAW`` when no
    empty cell remains, otherwise ``None`` (undecided).
    """
    for a, b, c in WINNING_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
    if any(cell is None for cell in board):
        return None
    return DRAW

"""Move generation for dama pieces.

Each handler is a plain function ``(origin, piece, board) -> [MoveOption]``
that knows one family of moves. The generator runs a fixed, ordered tuple of
handlers and concatenates their results; no handler filters out what another
one produced, so a capture may be reported both as a single jump and as the
first leg of a longer sequence.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Protocol, Sequence, Tuple

from ..geometry import ALL_DIAGONALS, Coord, Direction, forward_diagonals
from .board import Board, MoveOption
from .pieces import Piece


Handler = Callable[[Coord, Piece, Board], List[MoveOption]]


class MoveGenerator(Protocol):
    def valid_moves(self, board: Board, origin: Coord) -> List[MoveOption]:
        ...


def _directions(piece: Piece) -> Tuple[Direction, ...]:
    if piece.is_king:
        return ALL_DIAGONALS
    return forward_diagonals(piece.owner)


def _on_edge(board: Board, square: Coord) -> bool:
    return square.col == 0 or square.col == board.size - 1


def _is_open(board: Board, square: Coord) -> bool:
    return board.is_playable(square) and board.is_empty(square)


def _is_enemy(board: Board, square: Coord, piece: Piece) -> bool:
    occupant = board.piece_at(square)
    return occupant is not None and occupant.owner != piece.owner


def pawn_moves(origin: Coord, piece: Piece, board: Board) -> List[MoveOption]:
    # One step forward, or a short jump over an adjacent opponent
    if piece.is_king:
        return []

    moves: List[MoveOption] = []
    for direction in forward_diagonals(piece.owner):
        neighbor = origin.step(direction)
        if not board.is_playable(neighbor):
            continue

        if board.is_empty(neighbor):
            moves.append(MoveOption(to=neighbor))
        elif _is_enemy(board, neighbor, piece):
            landing = neighbor.step(direction)
            if _is_open(board, landing):
                moves.append(MoveOption(to=landing, captured=neighbor))
    return moves


def king_moves(origin: Coord, piece: Piece, board: Board) -> List[MoveOption]:
    """Flying king moves along all four diagonals.

    A ray may jump at most one opponent. Every empty square after the jumped
    piece is a landing that carries the capture; a second opponent or any
    friendly piece ends the ray.
    """

    if not piece.is_king:
        return []

    moves: List[MoveOption] = []
    for direction in ALL_DIAGONALS:
        captured = None
        square = origin.step(direction)
        while board.is_playable(square):
            occupant = board.piece_at(square)
            if occupant is None:
                moves.append(MoveOption(to=square, captured=captured))
            else:
                if occupant.owner == piece.owner or captured is not None:
                    break
                captured = square
            square = square.step(direction)
    return moves


def pawn_edge_captures(origin: Coord, piece: Piece, board: Board) -> List[MoveOption]:
    """Capture an opponent on the outer column by bouncing off the edge.

    The pawn lands two rows ahead in the column it started from rather than
    on the diagonal continuation, which would be off the board.
    """

    if piece.is_king:
        return []

    moves: List[MoveOption] = []
    for direction in forward_diagonals(piece.owner):
        neighbor = origin.step(direction)
        if not board.is_playable(neighbor) or not _is_enemy(board, neighbor, piece):
            continue
        if not _on_edge(board, neighbor):
            continue

        landing = Coord(origin.row + 2 * direction[0], origin.col)
        if _is_open(board, landing):
            moves.append(MoveOption(to=landing, captured=neighbor))
    return moves


def king_edge_captures(origin: Coord, piece: Piece, board: Board) -> List[MoveOption]:
    # The first piece met on each ray decides; only one bounce landing is offered
    if not piece.is_king:
        return []

    moves: List[MoveOption] = []
    for direction in ALL_DIAGONALS:
        dr, dc = direction
        square = origin.step(direction)
        while board.is_playable(square):
            if board.is_empty(square):
                square = square.step(direction)
                continue

            if _is_enemy(board, square, piece) and _on_edge(board, square):
                landing = Coord(square.row + dr, square.col - dc)
                if _is_open(board, landing):
                    moves.append(MoveOption(to=landing, captured=square))
            break
    return moves


def _single_captures(position: Coord, piece: Piece, board: Board) -> Iterator[Tuple[Coord, Coord]]:
    # Yields (captured, landing) pairs reachable with one jump from position
    for direction in _directions(piece):
        target = position.step(direction)
        if not board.is_playable(target) or not _is_enemy(board, target, piece):
            continue
        landing = target.step(direction)
        if _is_open(board, landing):
            yield target, landing

    edge_handler = king_edge_captures if piece.is_king else pawn_edge_captures
    for option in edge_handler(position, piece, board):
        yield option.captures[0], option.to


def _capture_sequences(
    position: Coord,
    piece: Piece,
    board: Board,
    captured_so_far: Tuple[Coord, ...],
) -> Iterator[Tuple[Coord, Tuple[Coord, ...]]]:
    for captured, landing in _single_captures(position, piece, board):
        if captured in captured_so_far:
            continue
        sequence = captured_so_far + (captured,)
        yield from _capture_sequences(landing, piece, board, sequence)
        yield landing, sequence


def multi_capture_moves(origin: Coord, piece: Piece, board: Board) -> List[MoveOption]:
    """Chained captures of two or more pieces in one move.

    The board is not modified during the search: jumped pieces stay where
    they are and the moving piece stays on ``origin``. Each branch carries
    its own tuple of captured squares, and a square already in that tuple
    cannot be jumped again. Every landing of a sequence is reported, not
    only the final one; single jumps are left to the other handlers.
    """

    moves: List[MoveOption] = []
    for landing, captured in _capture_sequences(origin, piece, board, ()):
        if len(captured) > 1:
            moves.append(MoveOption(to=landing, captured=captured))
    return moves


DEFAULT_HANDLERS: Tuple[Handler, ...] = (
    multi_capture_moves,
    pawn_moves,
    king_moves,
    pawn_edge_captures,
    king_edge_captures,
)


class HandlerChainGenerator:
    def __init__(self, handlers: Sequence[Handler] = DEFAULT_HANDLERS) -> None:
        self.handlers: Tuple[Handler, ...] = tuple(handlers)

    def valid_moves(self, board: Board, origin: Coord) -> List[MoveOption]:
        piece = board.piece_at(origin)
        if piece is None:
            return []

        moves: List[MoveOption] = []
        for handler in self.handlers:
            moves.extend(handler(origin, piece, board))
        return moves

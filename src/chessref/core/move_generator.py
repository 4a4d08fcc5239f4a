"""Pseudo-legal move generation and attack detection.

Every generator is a pure function of a piece and the piece set it stands
in. The result respects board bounds and blocking/capture rules of the
piece kind, but does not check whether the mover's own king is left in
check; :class:`~chessref.core.board.Board` filters that afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from chessref.core.coordinate import Coordinate
from chessref.core.enums import PieceType, Team
from chessref.core.piece import Piece

Occupancy = Mapping[Coordinate, Piece]
PieceSet = Iterable[Piece] | Occupancy

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_ALL_SQUARES: tuple[Coordinate, ...] = tuple(
    Coordinate(f, r) for r in range(8) for f in range(8)
)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Coordinate, tuple[Coordinate, ...]]:
    targets: dict[Coordinate, tuple[Coordinate, ...]] = {}
    for sq in _ALL_SQUARES:
        moves: list[Coordinate] = []
        for df, dr in offsets:
            af = sq.file + df
            ar = sq.rank + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(Coordinate(af, ar))
        targets[sq] = tuple(moves)
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Coordinate, tuple[tuple[Coordinate, ...], ...]]:
    rays_per_square: dict[Coordinate, tuple[tuple[Coordinate, ...], ...]] = {}
    for sq in _ALL_SQUARES:
        square_rays: list[tuple[Coordinate, ...]] = []
        for df, dr in directions:
            af = sq.file + df
            ar = sq.rank + dr
            ray: list[Coordinate] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(Coordinate(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square[sq] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


def occupancy(pieces: PieceSet) -> Occupancy:
    """Map each occupied coordinate to its piece.

    An already built mapping is returned unchanged.
    """
    if isinstance(pieces, Mapping):
        return pieces
    return {piece.position: piece for piece in pieces}


def _square(file_idx: int, rank_idx: int) -> Coordinate | None:
    if 0 <= file_idx < 8 and 0 <= rank_idx < 8:
        return Coordinate(file_idx, rank_idx)
    return None


# -- Piece-specific generators ----------------------------------------------


def _pawn(piece: Piece, board: Occupancy) -> list[Coordinate]:
    moves: list[Coordinate] = []
    team = piece.team
    direction = team.forward
    file_idx = piece.position.file
    rank_idx = piece.position.rank

    one_step = _square(file_idx, rank_idx + direction)
    if one_step is not None and one_step not in board:
        moves.append(one_step)
        if not piece.has_moved and rank_idx == team.pawn_rank:
            two_step = _square(file_idx, rank_idx + 2 * direction)
            if two_step is not None and two_step not in board:
                moves.append(two_step)

    for df in (-1, 1):
        cap_sq = _square(file_idx + df, rank_idx + direction)
        if cap_sq is None:
            continue
        target = board.get(cap_sq)
        if target is not None:
            if target.team != team:
                moves.append(cap_sq)
            continue
        # En passant: the eligible pawn stands beside us, not on cap_sq
        beside = board.get(Coordinate(cap_sq.file, rank_idx))
        if (
            beside is not None
            and beside.is_pawn
            and beside.team != team
            and beside.en_passant
        ):
            moves.append(cap_sq)
    return moves


def _stepper(
    piece: Piece,
    board: Occupancy,
    targets: dict[Coordinate, tuple[Coordinate, ...]],
) -> list[Coordinate]:
    moves: list[Coordinate] = []
    for to_sq in targets[piece.position]:
        target = board.get(to_sq)
        if target is None or target.team != piece.team:
            moves.append(to_sq)
    return moves


def _sliding(
    piece: Piece,
    board: Occupancy,
    rays: dict[Coordinate, tuple[tuple[Coordinate, ...], ...]],
) -> list[Coordinate]:
    moves: list[Coordinate] = []
    for ray in rays[piece.position]:
        for to_sq in ray:
            target = board.get(to_sq)
            if target is None:
                moves.append(to_sq)
                continue
            if target.team != piece.team:
                moves.append(to_sq)
            break
    return moves


def _knight(piece: Piece, board: Occupancy) -> list[Coordinate]:
    return _stepper(piece, board, _KNIGHT_TARGETS)


def _bishop(piece: Piece, board: Occupancy) -> list[Coordinate]:
    return _sliding(piece, board, _BISHOP_RAYS)


def _rook(piece: Piece, board: Occupancy) -> list[Coordinate]:
    return _sliding(piece, board, _ROOK_RAYS)


def _queen(piece: Piece, board: Occupancy) -> list[Coordinate]:
    return _sliding(piece, board, _QUEEN_RAYS)


def _king(piece: Piece, board: Occupancy) -> list[Coordinate]:
    return _stepper(piece, board, _KING_TARGETS)


_GENERATORS: dict[PieceType, Callable[[Piece, Occupancy], list[Coordinate]]] = {
    PieceType.PAWN: _pawn,
    PieceType.KNIGHT: _knight,
    PieceType.BISHOP: _bishop,
    PieceType.ROOK: _rook,
    PieceType.QUEEN: _queen,
    PieceType.KING: _king,
}


# -- Public API ---------------------------------------------------------------


def pawn_moves(piece: Piece, pieces: PieceSet) -> list[Coordinate]:
    return _pawn(piece, occupancy(pieces))


def knight_moves(piece: Piece, pieces: PieceSet) -> list[Coordinate]:
    return _knight(piece, occupancy(pieces))


def bishop_moves(piece: Piece, pieces: PieceSet) -> list[Coordinate]:
    return _bishop(piece, occupancy(pieces))


def rook_moves(piece: Piece, pieces: PieceSet) -> list[Coordinate]:
    return _rook(piece, occupancy(pieces))


def queen_moves(piece: Piece, pieces: PieceSet) -> list[Coordinate]:
    return _queen(piece, occupancy(pieces))


def king_moves(piece: Piece, pieces: PieceSet) -> list[Coordinate]:
    """Adjacent squares only; castling comes from :func:`castling_moves`."""
    return _king(piece, occupancy(pieces))


def pseudo_legal_moves(piece: Piece, pieces: PieceSet) -> list[Coordinate]:
    """Candidate destinations for *piece*, dispatched by its kind."""
    return _GENERATORS[piece.kind](piece, occupancy(pieces))


def attacked_squares(piece: Piece, pieces: PieceSet) -> list[Coordinate]:
    """Squares *piece* attacks, whether or not they are occupied.

    Differs from :func:`pseudo_legal_moves` only for pawns, which attack
    both forward diagonals and never attack straight ahead.
    """
    board = occupancy(pieces)
    if not piece.is_pawn:
        return _GENERATORS[piece.kind](piece, board)
    attacks: list[Coordinate] = []
    rank_idx = piece.position.rank + piece.team.forward
    for df in (-1, 1):
        sq = _square(piece.position.file + df, rank_idx)
        if sq is not None:
            attacks.append(sq)
    return attacks


def is_square_attacked(square: Coordinate, by_team: Team, pieces: PieceSet) -> bool:
    """Is *square* attacked by any piece of *by_team*?"""
    board = occupancy(pieces)
    for piece in board.values():
        if piece.team == by_team and square in attacked_squares(piece, board):
            return True
    return False


def castling_moves(king: Piece, pieces: PieceSet) -> list[Coordinate]:
    """Castling destinations for *king*, given as the partner rook's square.

    Requires an unmoved king that is not in check and an unmoved rook of the
    same team on a corner of the king's rank. Every square between them must
    be empty, and the two squares the king travels over must not be attacked.
    """
    if not king.is_king or king.has_moved:
        return []

    board = occupancy(pieces)
    enemy = king.team.opposite
    origin = king.position
    if is_square_attacked(origin, enemy, board):
        return []

    moves: list[Coordinate] = []
    for rook_file in (0, 7):
        rook_sq = Coordinate(rook_file, origin.rank)
        rook = board.get(rook_sq)
        if (
            rook is None
            or rook.kind != PieceType.ROOK
            or rook.team != king.team
            or rook.has_moved
            or abs(rook_file - origin.file) < 3
        ):
            continue

        direction = 1 if rook_file > origin.file else -1
        between = range(origin.file + direction, rook_file, direction)
        if any(Coordinate(f, origin.rank) in board for f in between):
            continue

        path = (
            Coordinate(origin.file + direction, origin.rank),
            Coordinate(origin.file + 2 * direction, origin.rank),
        )
        if any(is_square_attacked(sq, enemy, board) for sq in path):
            continue
        moves.append(rook_sq)
    return moves

"""FEN parsing and serialization."""

from __future__ import annotations

from chessref.core.board import Board
from chessref.core.coordinate import Coordinate
from chessref.core.enums import PieceType, Team
from chessref.core.piece import Piece
from chessref.core.settings import RuleSettings

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# Castling letter → (team, rook file)
_CASTLING_RIGHTS: dict[str, tuple[Team, int]] = {
    "K": (Team.WHITE, 7),
    "Q": (Team.WHITE, 0),
    "k": (Team.BLACK, 7),
    "q": (Team.BLACK, 0),
}


def initial_pieces() -> list[Piece]:
    """Pieces of the standard starting position."""
    pieces: list[Piece] = []
    for team in (Team.WHITE, Team.BLACK):
        for f, pt in enumerate(_BACK_RANK):
            pieces.append(Piece(pt, team, Coordinate(f, team.home_rank)))
        for f in range(8):
            pieces.append(Piece(PieceType.PAWN, team, Coordinate(f, team.pawn_rank)))
    return pieces


def board_from_fen(fen: str, settings: RuleSettings | None = None) -> Board:
    """Parse a FEN string into a :class:`Board`.

    Moved flags are reconstructed: kings and corner rooks count as unmoved
    only when a matching castling right is present, pawns only on their
    starting rank.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Side to move
    if side_part == "w":
        side = Team.WHITE
    elif side_part == "b":
        side = Team.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 2. Castling
    rights: set[tuple[Team, int]] = set()
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_RIGHTS.get(ch)
            if right is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            rights.add(right)
    castling_teams = {team for team, _ in rights}

    # 3. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    pieces: list[Piece] = []
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                piece = Piece.from_char(ch, Coordinate(file, rank))
                piece.has_moved = _has_moved(piece, rights, castling_teams)
                pieces.append(piece)
                file += 1
            if file > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 4. En passant
    if ep_part != "-":
        ep = Coordinate.parse(ep_part)
        expected_ep_rank = 5 if side == Team.WHITE else 2
        if ep.rank != expected_ep_rank:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        # The pawn that just advanced stands one rank past the target square
        pawn_sq = Coordinate(ep.file, ep.rank + side.opposite.forward)
        for piece in pieces:
            if piece.position == pawn_sq and piece.is_pawn and piece.team != side:
                piece.en_passant = True
                break
        else:
            raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}")

    # 5–6. Clocks (optional)
    if len(parts) > 4:
        halfmove = int(parts[4])
        if halfmove < 0:
            raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")
    else:
        halfmove = 0

    if len(parts) > 5:
        fullmove = int(parts[5])
        if fullmove < 1:
            raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")
    else:
        fullmove = 1

    turn_count = (fullmove - 1) * 2 + (1 if side == Team.BLACK else 0)
    return Board(pieces, turn_count, half_move_clock=halfmove, settings=settings)


def _has_moved(
    piece: Piece,
    rights: set[tuple[Team, int]],
    castling_teams: set[Team],
) -> bool:
    position = piece.position
    if piece.kind == PieceType.PAWN:
        return position.rank != piece.team.pawn_rank
    if piece.kind == PieceType.KING:
        return piece.team not in castling_teams
    if piece.kind == PieceType.ROOK:
        if position.rank != piece.team.home_rank:
            return True
        return (piece.team, position.file) not in rights
    return False


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    pieces = {piece.position: piece for piece in board.get_pieces()}

    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pieces.get(Coordinate(file, rank))
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if board.current_team == Team.WHITE else "b"

    # 3. Castling
    castling_str = ""
    for letter, (team, rook_file) in _CASTLING_RIGHTS.items():
        if _can_castle(pieces, board.king(team), rook_file):
            castling_str += letter
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = "-"
    for piece in pieces.values():
        if piece.en_passant:
            target = Coordinate(
                piece.position.file, piece.position.rank - piece.team.forward
            )
            ep_str = target.name
            break

    fullmove = board.turn_count // 2 + 1
    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{board.half_move_clock} {fullmove}"
    )


def _can_castle(
    pieces: dict[Coordinate, Piece], king: Piece, rook_file: int
) -> bool:
    if king.has_moved or king.position.rank != king.team.home_rank:
        return False
    rook = pieces.get(Coordinate(rook_file, king.team.home_rank))
    return (
        rook is not None
        and rook.kind == PieceType.ROOK
        and rook.team == king.team
        and not rook.has_moved
    )

"""Board — the aggregate that owns the pieces and runs the rules."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from chessref.core.coordinate import Coordinate
from chessref.core.enums import (
    PROMOTION_TYPES,
    DrawReason,
    GameState,
    MoveKind,
    PieceType,
    Team,
)
from chessref.core.errors import InvalidBoardError
from chessref.core.move import MoveRecord
from chessref.core.move_generator import (
    castling_moves,
    occupancy,
    pseudo_legal_moves,
)
from chessref.core.piece import Piece
from chessref.core.settings import DEFAULT_SETTINGS, RuleSettings

_LOGGER = logging.getLogger(__name__)

# (side to move, sorted (kind, team, file, rank) of every piece)
PositionKey = tuple[int, tuple[tuple[int, int, int, int], ...]]


class Board:
    """Full game state: pieces, turn counter, clocks and outcome.

    The board exclusively owns its pieces. Everything handed out
    (:meth:`get_pieces`, :meth:`piece_at`, :meth:`king`) is an independent
    copy. Legality of a candidate move is decided by executing it on a
    :meth:`clone` and inspecting the clone; the live board is never mutated
    speculatively.

    Call :meth:`calculate_all_moves` once after construction; every
    successful :meth:`play_move` recalculates on its own.
    """

    __slots__ = (
        "_pieces",
        "_turn_count",
        "_half_move_clock",
        "_settings",
        "_state",
        "_winning_team",
        "_draw_reason",
        "_move_history",
        "_position_history",
        "_position_counts",
    )

    def __init__(
        self,
        pieces: Iterable[Piece],
        turn_count: int = 0,
        *,
        half_move_clock: int = 0,
        settings: RuleSettings | None = None,
    ) -> None:
        if turn_count < 0:
            raise ValueError(f"Invalid turn count: {turn_count!r}")
        if half_move_clock < 0:
            raise ValueError(f"Invalid half-move clock: {half_move_clock!r}")

        self._pieces: list[Piece] = []
        for piece in pieces:
            owned = piece.clone()
            owned.legal_moves = []
            self._pieces.append(owned)
        self._validate()

        self._turn_count = turn_count
        self._half_move_clock = half_move_clock
        self._settings = settings if settings is not None else DEFAULT_SETTINGS
        self._state = GameState.ONGOING
        self._winning_team: Team | None = None
        self._draw_reason: DrawReason | None = None
        self._move_history: list[MoveRecord] = []

        key = self._position_key()
        self._position_history: list[PositionKey] = [key]
        self._position_counts: dict[PositionKey, int] = {key: 1}

    def _validate(self) -> None:
        kings = Counter(piece.team for piece in self._pieces if piece.is_king)
        if kings[Team.WHITE] != 1 or kings[Team.BLACK] != 1:
            _LOGGER.error(
                "Invalid board state: %d white king(s), %d black king(s) in %s",
                kings[Team.WHITE],
                kings[Team.BLACK],
                [(str(piece), piece.position) for piece in self._pieces],
            )
            raise InvalidBoardError(
                "Invalid board: must have exactly one king per team"
            )

        seen: set[Coordinate] = set()
        for piece in self._pieces:
            if not piece.position.is_on_board():
                _LOGGER.error("Invalid board state: %r is off the board", piece)
                raise InvalidBoardError(
                    f"Invalid board: piece off board at {piece.position!r}"
                )
            if piece.position in seen:
                _LOGGER.error("Invalid board state: two pieces on %s", piece.position)
                raise InvalidBoardError(
                    f"Invalid board: two pieces share {piece.position.name}"
                )
            seen.add(piece.position)

        eligible = [piece for piece in self._pieces if piece.en_passant]
        if len(eligible) > 1:
            _LOGGER.error("Invalid board state: %d en passant pawns", len(eligible))
            raise InvalidBoardError("Invalid board: more than one en passant pawn")

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def initial(cls, settings: RuleSettings | None = None) -> Board:
        """Standard starting position."""
        from chessref.core.notation import initial_pieces

        return cls(initial_pieces(), settings=settings)

    @classmethod
    def from_fen(cls, fen: str, settings: RuleSettings | None = None) -> Board:
        from chessref.core.notation import board_from_fen

        return board_from_fen(fen, settings)

    def to_fen(self) -> str:
        """Serialise the position to Forsyth–Edwards Notation."""
        from chessref.core.notation import board_to_fen

        return board_to_fen(self)

    def clone(self) -> Board:
        """Deep copy; mutating the copy never affects this board."""
        board = Board(
            self._pieces,
            self._turn_count,
            half_move_clock=self._half_move_clock,
            settings=self._settings,
        )
        for copied, original in zip(board._pieces, self._pieces, strict=True):
            copied.legal_moves = list(original.legal_moves)
        board._state = self._state
        board._winning_team = self._winning_team
        board._draw_reason = self._draw_reason
        board._move_history = self._move_history.copy()
        board._position_history = self._position_history.copy()
        board._position_counts = self._position_counts.copy()
        return board

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def current_team(self) -> Team:
        return Team.WHITE if self._turn_count % 2 == 0 else Team.BLACK

    @property
    def current_game_state(self) -> GameState:
        return self._state

    @property
    def winning_team_result(self) -> Team | None:
        return self._winning_team

    @property
    def draw_reason(self) -> DrawReason | None:
        return self._draw_reason

    @property
    def turn_count(self) -> int:
        return self._turn_count

    @property
    def half_move_clock(self) -> int:
        return self._half_move_clock

    @property
    def settings(self) -> RuleSettings:
        return self._settings

    @property
    def move_history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._move_history)

    @property
    def position_history(self) -> tuple[PositionKey, ...]:
        return tuple(self._position_history)

    @property
    def in_check(self) -> bool:
        """Is the side to move in check?"""
        team = self.current_team
        return self.is_king_in_check(
            self._king(team), self._team_pieces(team.opposite)
        )

    # ── Snapshots ────────────────────────────────────────────────────────

    def get_pieces(self) -> list[Piece]:
        return [piece.clone() for piece in self._pieces]

    def piece_at(self, square: Coordinate) -> Piece | None:
        piece = self._piece_at(square)
        return piece.clone() if piece is not None else None

    def king(self, team: Team) -> Piece:
        return self._king(team).clone()

    def repetition_count(self) -> int:
        """How often the current position occurred in this game."""
        return self._position_counts.get(self._position_history[-1], 0)

    # ── Move generation ──────────────────────────────────────────────────

    def calculate_all_moves(self) -> None:
        """Refresh cached legal moves and the game state for the side to move."""
        if self._state.is_terminal:
            return

        team = self.current_team
        board = occupancy(self._pieces)
        for piece in self._pieces:
            if piece.team != team:
                piece.legal_moves = []
                continue
            candidates = pseudo_legal_moves(piece, board)
            if piece.is_king:
                candidates += castling_moves(piece, board)
            piece.legal_moves = [
                dest for dest in candidates if self._is_safe(piece, dest)
            ]

        self._update_game_state()

    def is_king_in_check(self, king: Piece, opponent_pieces: Iterable[Piece]) -> bool:
        """Does any opponent piece's pseudo-legal move land on *king*?"""
        board = occupancy(self._pieces)
        return any(
            king.position in pseudo_legal_moves(enemy, board)
            for enemy in opponent_pieces
        )

    def _is_safe(self, piece: Piece, destination: Coordinate) -> bool:
        target = self._piece_at(destination)
        if target is not None and target.is_king and target.team != piece.team:
            return False
        simulated = self._simulate(piece, destination)
        return not simulated.is_king_in_check(
            simulated._king(piece.team),
            simulated._team_pieces(piece.team.opposite),
        )

    def _simulate(self, piece: Piece, destination: Coordinate) -> Board:
        board = self.clone()
        mover = board._find(piece)
        assert mover is not None
        board._execute(mover, destination, PieceType.QUEEN)
        return board

    def _update_game_state(self) -> None:
        team = self.current_team
        if not any(piece.legal_moves for piece in self._team_pieces(team)):
            if self.in_check:
                self._state = GameState.CHECKMATE
                self._winning_team = team.opposite
            else:
                self._state = GameState.STALEMATE
        elif self._half_move_clock >= self._settings.fifty_move_limit:
            self._state = GameState.DRAW
            self._draw_reason = DrawReason.FIFTY_MOVE
        elif self.repetition_count() >= self._settings.repetition_threshold:
            self._state = GameState.DRAW
            self._draw_reason = DrawReason.THREEFOLD_REPETITION

        if self._state.is_terminal:
            for piece in self._pieces:
                piece.legal_moves = []
            _LOGGER.info(
                "Game over after %d half-moves: %s (winner: %s, draw reason: %s)",
                self._turn_count,
                self._state.name,
                self._winning_team,
                self._draw_reason.name if self._draw_reason else None,
            )

    # ── Move execution ───────────────────────────────────────────────────

    def play_move(
        self,
        piece: Piece,
        destination: Coordinate,
        promotion: PieceType | None = None,
    ) -> bool:
        """Execute a legal move of *piece* to *destination*.

        *piece* may be any snapshot of an owned piece. Castling is requested
        by moving the king onto its partner rook. Promotion defaults to a
        queen. Returns ``False`` without touching the board when the move is
        rejected.
        """
        if self._state.is_terminal:
            _LOGGER.debug("Rejected move to %s: game is over", destination)
            return False

        mover = self._find(piece)
        if mover is None or mover.team != self.current_team:
            _LOGGER.debug("Rejected move of %r: not on the moving side", piece)
            return False
        if destination not in mover.legal_moves:
            _LOGGER.debug(
                "Rejected move %s→%s: not a legal destination",
                mover.position,
                destination,
            )
            return False
        if promotion is not None and promotion not in PROMOTION_TYPES:
            _LOGGER.debug("Rejected promotion to %s", promotion.name)
            return False

        record = self._execute(mover, destination, promotion or PieceType.QUEEN)
        self._move_history.append(record)
        self._turn_count += 1
        if record.resets_half_move_clock:
            self._half_move_clock = 0
        else:
            self._half_move_clock += 1
        self._record_position()
        _LOGGER.debug("Played %s (%s)", record, record.kind.name)

        self.calculate_all_moves()
        return True

    def _execute(
        self, mover: Piece, destination: Coordinate, promotion: PieceType
    ) -> MoveRecord:
        target = self._piece_at(destination)
        castling = self._is_castling(mover, target)
        en_passant = self._en_passant_victim(mover, destination, target)

        # Eligibility lives for exactly one ply
        for piece in self._pieces:
            piece.en_passant = False

        if castling:
            assert target is not None
            return self._execute_castling(mover, target)
        if en_passant is not None:
            return self._execute_en_passant(mover, destination, en_passant)
        return self._execute_standard(mover, destination, target, promotion)

    @staticmethod
    def _is_castling(mover: Piece, target: Piece | None) -> bool:
        return (
            mover.is_king
            and not mover.has_moved
            and target is not None
            and target.kind == PieceType.ROOK
            and target.team == mover.team
            and not target.has_moved
        )

    def _en_passant_victim(
        self, mover: Piece, destination: Coordinate, target: Piece | None
    ) -> Piece | None:
        if not mover.is_pawn or target is not None:
            return None
        if destination.file == mover.position.file:
            return None
        behind = Coordinate(destination.file, destination.rank - mover.team.forward)
        victim = self._piece_at(behind)
        if (
            victim is not None
            and victim.is_pawn
            and victim.team != mover.team
            and victim.en_passant
        ):
            return victim
        return None

    def _execute_castling(self, king: Piece, rook: Piece) -> MoveRecord:
        origin = king.position
        direction = 1 if rook.position.file > origin.file else -1
        king_to = Coordinate(origin.file + 2 * direction, origin.rank)
        king.position = king_to
        rook.position = Coordinate(king_to.file - direction, origin.rank)
        king.has_moved = True
        rook.has_moved = True
        if direction > 0:
            kind = MoveKind.CASTLE_KINGSIDE
        else:
            kind = MoveKind.CASTLE_QUEENSIDE
        return MoveRecord(king.team, PieceType.KING, origin, king_to, kind)

    def _execute_en_passant(
        self, pawn: Piece, destination: Coordinate, victim: Piece
    ) -> MoveRecord:
        origin = pawn.position
        self._remove(victim)
        pawn.position = destination
        pawn.has_moved = True
        return MoveRecord(
            pawn.team,
            PieceType.PAWN,
            origin,
            destination,
            MoveKind.EN_PASSANT,
            captured=PieceType.PAWN,
        )

    def _execute_standard(
        self,
        mover: Piece,
        destination: Coordinate,
        target: Piece | None,
        promotion: PieceType,
    ) -> MoveRecord:
        origin = mover.position
        if target is not None:
            self._remove(target)
        mover.position = destination
        mover.has_moved = True

        kind = MoveKind.NORMAL
        promoted: PieceType | None = None
        if mover.is_pawn:
            if abs(destination.rank - origin.rank) == 2:
                mover.en_passant = True
                kind = MoveKind.DOUBLE_PAWN
            elif destination.rank == mover.team.promotion_rank:
                self._replace(mover, Piece(promotion, mover.team, destination, True))
                kind = MoveKind.PROMOTION
                promoted = promotion

        return MoveRecord(
            mover.team,
            mover.kind,
            origin,
            destination,
            kind,
            captured=target.kind if target is not None else None,
            promotion=promoted,
        )

    def _record_position(self) -> None:
        key = self._position_key()
        self._position_history.append(key)
        self._position_counts[key] = self._position_counts.get(key, 0) + 1

    def _position_key(self) -> PositionKey:
        placement = sorted(
            (int(p.kind), int(p.team), p.position.file, p.position.rank)
            for p in self._pieces
        )
        return (int(self.current_team), tuple(placement))

    # ── Owned-piece helpers ──────────────────────────────────────────────

    def _find(self, piece: Piece) -> Piece | None:
        for owned in self._pieces:
            if owned.same_identity(piece) and owned.kind == piece.kind:
                return owned
        return None

    def _piece_at(self, square: Coordinate) -> Piece | None:
        for piece in self._pieces:
            if piece.position == square:
                return piece
        return None

    def _king(self, team: Team) -> Piece:
        for piece in self._pieces:
            if piece.is_king and piece.team == team:
                return piece
        raise InvalidBoardError(f"No {team.name} king on board")

    def _team_pieces(self, team: Team) -> list[Piece]:
        return [piece for piece in self._pieces if piece.team == team]

    def _remove(self, piece: Piece) -> None:
        self._pieces = [owned for owned in self._pieces if owned is not piece]

    def _replace(self, piece: Piece, replacement: Piece) -> None:
        self._pieces = [
            replacement if owned is piece else owned for owned in self._pieces
        ]

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __repr__(self) -> str:
        board = occupancy(self._pieces)
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = board.get(Coordinate(file, rank))
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

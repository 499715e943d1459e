"""
The Game class is the entrypoint into the domain layer for the UI (or the service layer).
It is responsible for orchestrating all the business logic required to play a turn:
selecting pieces, committing moves, handing off pawn promotions and keeping the game status up to date.

NOTE: Nothing in here raises on bad input coming from the UI. Invalid clicks/moves are simply ignored (or drop the selection).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Self

from raumschach.chess.attacks import is_king_in_check
from raumschach.chess.board import Board
from raumschach.chess.legality import get_legal_moves, has_any_legal_move
from raumschach.chess.moves import Move
from raumschach.chess.pieces import Color, Piece, PieceType
from raumschach.chess.position import Position
from raumschach.chess.promotion import (
    PendingPromotion,
    is_promotable,
    is_promotion_move,
)
from raumschach.core.exceptions import InvalidSettingsError
from raumschach.core.settings import GameSettings
from raumschach.core.shared_types import Status

logger = logging.getLogger(__name__)


@dataclass
class GameState:
    board: Board
    current_player: Color
    status: Status


def initialize_board() -> GameState:
    """Fresh game: starting position, white to move."""
    return GameState(
        board=Board.starting_position(),
        current_player=Color.WHITE,
        status=Status.ACTIVE,
    )


def determine_status(
    board: Board, player_to_move: Color, captured_piece: Optional[Piece] = None
) -> Status:
    """
    Status of the game from the point of view of the player who is about to move
    ----

    NOTE: Capturing the king ends the game on the spot, no further checks are done.

    |              | has legal moves | no legal moves |
    |--------------|-----------------|----------------|
    | in check     | check           | checkmate      |
    | not in check | active          | stalemate      |
    """
    if captured_piece is not None and captured_piece.type == PieceType.KING:
        return Status.CHECKMATE

    in_check = is_king_in_check(board, player_to_move)
    has_moves = has_any_legal_move(board, player_to_move)
    if in_check and not has_moves:
        return Status.CHECKMATE
    if not in_check and not has_moves:
        return Status.STALEMATE
    if in_check:
        return Status.CHECK
    return Status.ACTIVE


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY THE UI / SERVICE ---

    state: GameState
    settings: GameSettings = field(default_factory=GameSettings)
    selected_position: Optional[Position] = None
    valid_moves: list[Position] = field(default_factory=list)
    move_history: list[Move] = field(default_factory=list)
    pending_promotion: Optional[PendingPromotion] = None

    @classmethod
    def new_game(cls, settings: Optional[GameSettings] = None) -> Self:
        return cls(state=initialize_board(), settings=settings or GameSettings())

    @classmethod
    def from_board(
        cls,
        board: Board,
        current_player: Color = Color.WHITE,
        settings: Optional[GameSettings] = None,
    ) -> Self:
        """Start from a custom position. The status is computed for the player to move."""
        status = determine_status(board, current_player)
        return cls(
            state=GameState(board, current_player, status),
            settings=settings or GameSettings(),
        )

    # --- READ ACCESSORS ---
    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def move_count(self) -> int:
        return len(self.move_history)

    def get_current_player(self) -> Color:
        return self.state.current_player

    def get_game_status(self) -> Status:
        return self.state.status

    def get_move_history(self) -> list[Move]:
        """A copy: the history can only grow through moves played in this game."""
        return list(self.move_history)

    def captured_pieces(self, color: Color) -> list[Piece]:
        """The pieces of `color` that were taken so far"""
        return [
            move.captured_piece
            for move in self.move_history
            if move.captured_piece is not None and move.captured_piece.color == color
        ]

    def get_valid_moves(self, position: Position) -> list[Position]:
        """Legal target cells for the current player's piece on `position` (empty for anything else)."""
        return get_legal_moves(
            self.state.board, position, self.state.current_player, self.state.status
        )

    # --- MUTATORS ---
    def select_square(self, position: Position) -> None:
        """
        Handle a click on a cell
        ----

        1. Off-board position (the UI sends negative coordinates to deselect) --> drop the selection (and any pending promotion)
        2. Nothing selected yet, own piece clicked --> select it and compute its legal moves
        3. Something selected, legal target clicked --> play the move (or start the promotion hand-off for a pawn reaching the far level)
        4. Something selected, another own piece clicked --> select that one instead
        5. Anything else --> drop the selection
        """
        if not position.is_within_bounds():
            if self.pending_promotion is not None:
                logger.debug("Promotion on %s cancelled", self.pending_promotion.position)
                self.pending_promotion = None
            self._clear_selection()
            return

        # waiting for the promotion choice: the pawn stays selected until a piece is picked
        if self.pending_promotion is not None:
            logger.debug("Ignoring click on %s, waiting for a promotion choice", position)
            return

        if self.selected_position is not None and position in self.valid_moves:
            from_position = self.selected_position
            moving_piece = self.state.board.piece(from_position)
            if is_promotion_move(moving_piece, position):
                self._enter_promotion(from_position, position)
            else:
                self._commit(from_position, position)
            return

        if self._is_own_piece(position):
            self._select(position)
            return

        self._clear_selection()

    def make_move(self, from_position: Position, to_position: Position) -> bool:
        """
        Play a move directly (without going through the selection)
        ----

        Returns False (and changes nothing) if the move is not legal for the player to move.
        A pawn reaching the far level is promoted to the default promotion piece from the settings.
        """
        if not self._is_legal(from_position, to_position):
            logger.debug(
                "Rejected move %s -> %s for %s",
                from_position,
                to_position,
                self.state.current_player,
            )
            return False

        moving_piece = self.state.board.piece(from_position)
        promote_to = (
            self.settings.default_promotion_piece
            if is_promotion_move(moving_piece, to_position)
            else None
        )
        self._commit(from_position, to_position, promote_to)
        return True

    def promote_pawn(
        self, from_position: Position, to_position: Position, piece_type: PieceType
    ) -> bool:
        """Play a pawn move onto the far level, promoting into `piece_type`. Returns False if that is not possible."""
        moving_piece = self.state.board.piece(from_position)
        if not (
            is_promotable(piece_type)
            and is_promotion_move(moving_piece, to_position)
            and self._is_legal(from_position, to_position)
        ):
            logger.debug(
                "Rejected promotion %s -> %s into %s", from_position, to_position, piece_type
            )
            return False

        self._commit(from_position, to_position, PieceType(piece_type))
        return True

    def handle_promotion_choice(self, piece_type: PieceType | str) -> None:
        """
        The player picked the piece the pawn turns into. Only then the move gets committed.
        Without a pending promotion (or with a piece a pawn cannot become) nothing happens.
        """
        pending = self.pending_promotion
        if pending is None or self.selected_position is None:
            logger.debug("No promotion pending, ignoring choice %r", piece_type)
            return

        if not is_promotable(piece_type):
            logger.warning("Cannot promote into %r, still waiting for a valid choice", piece_type)
            return

        self._commit(pending.from_position, pending.position, PieceType(piece_type))

    def reset_game(self) -> None:
        """Back to the starting position. Settings are kept."""
        self.state = initialize_board()
        self.move_history = []
        self.pending_promotion = None
        self._clear_selection()
        logger.info("Game reset")

    def update_settings(self, **changes: Any) -> None:
        """Partial update of the settings (validated, so an unsupported promotion piece or an unknown option raises InvalidSettingsError)"""
        unknown = sorted(set(changes) - set(GameSettings.model_fields))
        if unknown:
            raise InvalidSettingsError(f"Unknown setting(s): {','.join(unknown)}")
        self.settings = GameSettings.model_validate(
            self.settings.model_dump() | changes
        )

    # -- PRIVATE HELPERS ---
    def _is_own_piece(self, position: Position) -> bool:
        piece = self.state.board.piece(position)
        return piece is not None and piece.color == self.state.current_player

    def _is_legal(self, from_position: Position, to_position: Position) -> bool:
        return to_position in self.get_valid_moves(from_position)

    def _select(self, position: Position) -> None:
        self.selected_position = position
        self.valid_moves = self.get_valid_moves(position)
        logger.debug("Selected %s, %d legal moves", position, len(self.valid_moves))

    def _clear_selection(self) -> None:
        self.selected_position = None
        self.valid_moves = []

    def _enter_promotion(self, from_position: Position, to_position: Position) -> None:
        """
        Pawn reached the far level
        ----

        * auto promote: commit right away with the default promotion piece
        * otherwise: remember the pending promotion and wait for `handle_promotion_choice()`.
          The target stays the only highlighted move.
        """
        if self.settings.auto_promote:
            self._commit(from_position, to_position, self.settings.default_promotion_piece)
            return

        pawn = self.state.board.piece(from_position)
        # for the type checker: only pawns end up here
        assert pawn is not None
        self.pending_promotion = PendingPromotion(
            position=to_position, color=pawn.color, from_position=from_position
        )
        self.valid_moves = [to_position]
        logger.debug("Waiting for %s to pick a promotion on %s", pawn.color, to_position)

    def _commit(
        self,
        from_position: Position,
        to_position: Position,
        promote_to: Optional[PieceType] = None,
    ) -> None:
        """
        Commit a move
        -----

        1. build the new board (the old board object is never modified)
        2. determine the new status for the opponent
        3. update the history of moves
        4. install the new state with the opponent to move, clear selection and pending promotion
        """
        board = self.state.board
        moving_piece = board.piece(from_position)
        # for the type checker: only legal moves of existing pieces get committed
        assert moving_piece is not None
        captured_piece = board.piece(to_position)

        new_board = board.with_move(from_position, to_position, promote_to)
        next_player = self.state.current_player.opposite
        new_status = determine_status(new_board, next_player, captured_piece)

        move = Move(
            from_position=from_position,
            to_position=to_position,
            piece=moving_piece,
            captured_piece=captured_piece,
            promote_to=promote_to,
        )
        self.move_history.append(move)
        self.state = GameState(new_board, next_player, new_status)
        self.pending_promotion = None
        self._clear_selection()

        logger.info("%s played %s, status: %s", moving_piece.color, move.to_notation(), new_status)

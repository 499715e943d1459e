"""Orchestration of communication from the UI/API layer to the business logic (and the reverse direction)."""

import logging
from typing import Optional

from raumschach.api.models import (
    CellModel,
    GameStateResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRecord,
    MoveRequest,
    PendingPromotionModel,
    PieceModel,
    PromotionChoiceRequest,
    SelectSquareRequest,
    UpdateSettingsRequest,
)
from raumschach.chess.game import Game
from raumschach.chess.position import Position
from raumschach.core.exceptions import GameStateError, IllegalMoveError
from raumschach.core.settings import GameSettings

logger = logging.getLogger(__name__)


class ChessService:
    """
    Orchestration of layers for a single Raumschach session.

    The game lives in memory for as long as the service does (games are not stored anywhere).
    Unlike the Game itself, the service reports rejected moves with exceptions, so the caller learns *why* nothing happened.
    """

    def __init__(self, game: Optional[Game] = None) -> None:
        self.game = game if game is not None else Game.new_game()

    # -- UI / API logic ---
    def new_game(self, request: Optional[UpdateSettingsRequest] = None) -> GameStateResponse:
        """Throw away the current game and start a fresh one (optionally with different settings)."""
        settings = GameSettings.model_validate(
            self.game.settings.model_dump() | (request.changes() if request else {})
        )
        self.game = Game.new_game(settings)
        logger.info("New game started")
        return self._create_game_state_response()

    def get_game_state(self) -> GameStateResponse:
        """Retrieve current game state (used by the frontend to redraw the board)."""
        return self._create_game_state_response()

    def select_square(self, request: SelectSquareRequest) -> GameStateResponse:
        """A click on the board. Never fails: invalid clicks simply drop the selection."""
        self.game.select_square(request.target())
        return self._create_game_state_response()

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves for the piece on the requested square."""
        position = Position.from_notation(request.square)
        legal_moves = self.game.get_valid_moves(position)
        return LegalMovesResponse(
            square=request.square,
            color=self.game.get_current_player(),
            legal_moves=[target.to_notation() for target in legal_moves],
        )

    def make_move(self, request: MoveRequest) -> GameStateResponse:
        """Make a move attempt."""
        self._assert_game_not_over()

        from_position = Position.from_notation(request.from_square)
        to_position = Position.from_notation(request.to_square)
        if request.promote_to is not None:
            accepted = self.game.promote_pawn(from_position, to_position, request.promote_to)
        else:
            accepted = self.game.make_move(from_position, to_position)

        if not accepted:
            raise IllegalMoveError(
                f"Move not allowed: {request.from_square} -> {request.to_square}"
                + (f" promoting into {request.promote_to}" if request.promote_to else "")
            )
        return self._create_game_state_response()

    def choose_promotion(self, request: PromotionChoiceRequest) -> GameStateResponse:
        """Resolve the promotion the game is waiting for."""
        if self.game.pending_promotion is None:
            raise GameStateError("There is no pawn waiting to be promoted.")
        self.game.handle_promotion_choice(request.piece_type)
        return self._create_game_state_response()

    def update_settings(self, request: UpdateSettingsRequest) -> GameStateResponse:
        self.game.update_settings(**request.changes())
        return self._create_game_state_response()

    def reset_game(self) -> GameStateResponse:
        """Back to the starting position (settings are kept)."""
        self.game.reset_game()
        return self._create_game_state_response()

    # -- Internal helpers --
    def _assert_game_not_over(self) -> None:
        status = self.game.get_game_status()
        if status.is_terminal:
            raise GameStateError(f"Game is over. status: {status}")

    def _create_game_state_response(self) -> GameStateResponse:
        """Convert the current Game into a GameStateResponse."""
        game = self.game
        pending = game.pending_promotion
        return GameStateResponse(
            current_player=game.get_current_player(),
            status=game.get_game_status(),
            pieces=[
                CellModel(square=position.to_notation(), piece=PieceModel.from_piece(piece))
                for position, piece in game.board.occupied()
            ],
            selected_square=(
                game.selected_position.to_notation()
                if game.selected_position is not None
                else None
            ),
            valid_moves=[target.to_notation() for target in game.valid_moves],
            pending_promotion=(
                PendingPromotionModel(square=pending.position.to_notation(), color=pending.color)
                if pending is not None
                else None
            ),
            move_history=[MoveRecord.from_move(move) for move in game.get_move_history()],
            settings=game.settings,
        )

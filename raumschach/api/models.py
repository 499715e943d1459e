"""Requests and Response models"""

from typing import Any, Optional, Self

from pydantic import BaseModel, field_validator

from raumschach.chess.moves import Move
from raumschach.chess.pieces import Piece
from raumschach.chess.position import DESELECT, Position
from raumschach.core.exceptions import InvalidPositionError, InvalidRequestError
from raumschach.core.settings import PROMOTION_OPTIONS, GameSettings
from raumschach.core.shared_types import Color, PieceType, Status

# Cells are sent back and forth in Raumschach notation, ex. "Cc3"
SquareName = str


def _validate_square_name(value: str) -> str:
    try:
        Position.from_notation(value)
    except InvalidPositionError as e:
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        ) from e
    return value


def _validate_promotion_piece(value: Optional[PieceType]) -> Optional[PieceType]:
    if value is not None and value not in PROMOTION_OPTIONS:
        raise InvalidRequestError(
            f"A pawn cannot promote into a {value}. Pick one from {','.join(PROMOTION_OPTIONS)}"
        )
    return value


# --- SHARED MODELS ---
class PositionModel(BaseModel):
    """Raw coordinates as the UI knows them. Negative values are allowed: they mean 'deselect'."""

    level: int
    rank: int
    file: int

    @classmethod
    def from_position(cls, position: Position) -> Self:
        return cls(level=position.level, rank=position.rank, file=position.file)

    def to_position(self) -> Position:
        return Position(self.level, self.rank, self.file)


class PieceModel(BaseModel):
    type: PieceType
    color: Color

    @classmethod
    def from_piece(cls, piece: Piece) -> Self:
        return cls(type=piece.type, color=piece.color)


# --- REQUEST MODELS ---
class SelectSquareRequest(BaseModel):
    """A click on the board. Leaving out the position drops the current selection."""

    position: Optional[PositionModel] = None

    def target(self) -> Position:
        return self.position.to_position() if self.position is not None else DESELECT


class LegalMovesRequest(BaseModel):
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class MoveRequest(BaseModel):
    from_square: SquareName
    to_square: SquareName
    promote_to: Optional[PieceType] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)

    @field_validator("promote_to")
    @classmethod
    def validate_promotion(cls, value: Optional[PieceType]) -> Optional[PieceType]:
        return _validate_promotion_piece(value)


class PromotionChoiceRequest(BaseModel):
    piece_type: PieceType

    @field_validator("piece_type")
    @classmethod
    def validate_promotion(cls, value: PieceType) -> PieceType:
        _validate_promotion_piece(value)
        return value


class UpdateSettingsRequest(BaseModel):
    """Only the fields that are supplied get changed."""

    default_promotion_piece: Optional[PieceType] = None
    auto_promote: Optional[bool] = None

    @field_validator("default_promotion_piece")
    @classmethod
    def validate_promotion(cls, value: Optional[PieceType]) -> Optional[PieceType]:
        return _validate_promotion_piece(value)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


# --- RESPONSE MODELS ---
class CellModel(BaseModel):
    square: SquareName
    piece: PieceModel


class MoveRecord(BaseModel):
    from_square: SquareName
    to_square: SquareName
    piece: PieceModel
    captured_piece: Optional[PieceModel]
    promote_to: Optional[PieceType]
    notation: str

    @classmethod
    def from_move(cls, move: Move) -> Self:
        return cls(
            from_square=move.from_position.to_notation(),
            to_square=move.to_position.to_notation(),
            piece=PieceModel.from_piece(move.piece),
            captured_piece=(
                PieceModel.from_piece(move.captured_piece)
                if move.captured_piece is not None
                else None
            ),
            promote_to=move.promote_to,
            notation=move.to_notation(),
        )


class PendingPromotionModel(BaseModel):
    square: SquareName
    color: Color


class GameStateResponse(BaseModel):
    current_player: Color
    status: Status
    pieces: list[CellModel]
    selected_square: Optional[SquareName]
    valid_moves: list[SquareName]
    pending_promotion: Optional[PendingPromotionModel]
    move_history: list[MoveRecord]
    settings: GameSettings


class LegalMovesResponse(BaseModel):
    square: SquareName
    color: Color
    legal_moves: list[SquareName]

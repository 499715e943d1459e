"""Configuration of a game session (not part of the game state itself)."""

from pydantic import BaseModel, ConfigDict, field_validator

from raumschach.core.exceptions import InvalidSettingsError
from raumschach.core.shared_types import PieceType

# Pieces a pawn may turn into once it reaches the far level
PROMOTION_OPTIONS: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.UNICORN,
)


class GameSettings(BaseModel):
    """
    Options the UI can toggle
    ----

    * `auto_promote`: skip the promotion choice, always promote to `default_promotion_piece`.
    * `default_promotion_piece`: piece type used by auto promotion (and by direct moves that do not name one).
    """

    model_config = ConfigDict(extra="forbid")

    default_promotion_piece: PieceType = PieceType.QUEEN
    auto_promote: bool = False

    @field_validator("default_promotion_piece")
    @classmethod
    def validate_promotion_piece(cls, value: PieceType) -> PieceType:
        if value not in PROMOTION_OPTIONS:
            raise InvalidSettingsError(
                f"Cannot promote into a {value}. Pick one from {','.join(PROMOTION_OPTIONS)}"
            )
        return value

import pytest

from raumschach.api.models import (
    LegalMovesRequest,
    MoveRecord,
    MoveRequest,
    PieceModel,
    PositionModel,
    PromotionChoiceRequest,
    SelectSquareRequest,
    UpdateSettingsRequest,
)
from raumschach.chess.moves import Move
from raumschach.chess.pieces import Piece
from raumschach.chess.position import DESELECT, Position
from raumschach.core.exceptions import InvalidRequestError
from raumschach.core.shared_types import Color, PieceType


# -- Validation - MoveRequest --
def test_valid_square_names() -> None:
    """Test that MoveRequest accepts correctly written cells in Raumschach notation."""
    request = MoveRequest(from_square="Bc2", to_square="Cc2")
    assert request.from_square == "Bc2"
    assert request.to_square == "Cc2"
    assert request.promote_to is None


@pytest.mark.parametrize(
    "from_square, to_square",
    [
        ("Bc2", "Fc2"),  # no sixth level
        ("Bc2", "Cc6"),  # no sixth rank
        ("c2", "Cc2"),  # level missing
        ("Bc2", "Cc2c"),
        ("Aa²", "Aa1"),  # superscript two is no rank
    ],
)
def test_invalid_square_names(from_square: str, to_square: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(from_square=from_square, to_square=to_square)


def test_promotion_piece_in_move_request() -> None:
    request = MoveRequest(from_square="Dc3", to_square="Ec3", promote_to="unicorn")
    assert request.promote_to == PieceType.UNICORN


@pytest.mark.parametrize("piece_type", ["king", "pawn"])
def test_invalid_promotion_piece_in_move_request(piece_type: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(from_square="Dc3", to_square="Ec3", promote_to=piece_type)


# -- Validation - other requests --
def test_legal_moves_request() -> None:
    assert LegalMovesRequest(square="Aa1").square == "Aa1"
    with pytest.raises(InvalidRequestError):
        _ = LegalMovesRequest(square="Zz9")
    with pytest.raises(InvalidRequestError):
        _ = LegalMovesRequest(square="Aa²")


def test_promotion_choice_request() -> None:
    assert PromotionChoiceRequest(piece_type="rook").piece_type == PieceType.ROOK
    with pytest.raises(InvalidRequestError):
        _ = PromotionChoiceRequest(piece_type="king")


def test_select_square_request() -> None:
    """Leaving out the position, or sending negative coordinates, means 'deselect'"""
    request = SelectSquareRequest(position=PositionModel(level=2, rank=2, file=2))
    assert request.target() == Position(2, 2, 2)

    assert SelectSquareRequest().target() == DESELECT
    negative = SelectSquareRequest(position=PositionModel(level=-1, rank=-1, file=-1))
    assert not negative.target().is_within_bounds()


def test_position_model_roundtrip() -> None:
    position = Position.from_notation("Db4")
    assert PositionModel.from_position(position).to_position() == position


def test_update_settings_request_only_changes_given_fields() -> None:
    assert UpdateSettingsRequest().changes() == {}
    assert UpdateSettingsRequest(auto_promote=False).changes() == {"auto_promote": False}
    assert UpdateSettingsRequest(default_promotion_piece="bishop").changes() == {
        "default_promotion_piece": PieceType.BISHOP
    }
    with pytest.raises(InvalidRequestError):
        _ = UpdateSettingsRequest(default_promotion_piece="king")


# -- Response models --
def test_move_record_from_move() -> None:
    move = Move(
        from_position=Position.from_notation("Dc4"),
        to_position=Position.from_notation("Ed4"),
        piece=Piece.from_char("P"),
        captured_piece=Piece.from_char("n"),
        promote_to=PieceType.QUEEN,
    )
    record = MoveRecord.from_move(move)
    assert record.from_square == "Dc4"
    assert record.to_square == "Ed4"
    assert record.piece == PieceModel(type=PieceType.PAWN, color=Color.WHITE)
    assert record.captured_piece == PieceModel(type=PieceType.KNIGHT, color=Color.BLACK)
    assert record.notation == "Dc4Ed4q"

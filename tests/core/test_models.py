import pytest

from netchess.chess.pieces import Color
from netchess.core.models import GameResult, Role, Status


def test_host_plays_white() -> None:
    assert Role.HOST.color == Color.WHITE
    assert Role.JOIN.color == Color.BLACK


@pytest.mark.parametrize(
    "result, message",
    [
        (GameResult(Status.CHECKMATE, Color.BLACK), "Checkmate! Black wins!"),
        (GameResult(Status.CHECKMATE, Color.WHITE), "Checkmate! White wins!"),
        (GameResult(Status.TIMEOUT, Color.BLACK), "White's time is up! Black wins!"),
        (GameResult(Status.TIMEOUT, Color.WHITE), "Black's time is up! White wins!"),
        (GameResult(Status.ABORTED, None), "Connection lost. The game was abandoned."),
    ],
)
def test_result_message(result: GameResult, message: str) -> None:
    assert result.message == message

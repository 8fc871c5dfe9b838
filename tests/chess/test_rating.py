"""Unit tests for chessmatch/chess/rating.py"""

import pytest

from chessmatch.chess.rating import (
    RATING_FLOOR,
    expected_score_of_favourite,
    update_ratings,
)


@pytest.mark.parametrize(
    "rating_diff, expected",
    [
        (0, 500),
        (25, 500),
        (26, 537),
        (50, 537),
        (51, 640),
        (100, 640),
        (101, 691),
        (150, 691),
        (151, 760),
        (200, 760),
        (201, 849),
        (300, 849),
        (301, 909),
        (400, 909),
        (401, 950),
        (800, 950),
        (5000, 950),
        (-200, 760),  # only the size of the gap matters
    ],
)
def test_expected_score_table(rating_diff: int, expected: int) -> None:
    assert expected_score_of_favourite(rating_diff) == expected


@pytest.mark.parametrize(
    "winner, loser, is_draw, expected",
    [
        (1200, 1200, False, (1216, 1184)),
        (1400, 1200, False, (1407, 1193)),  # favourite wins, small gain
        (1200, 1400, False, (1224, 1376)),  # upset, large gain
        (1400, 1200, True, (1392, 1208)),  # the favourite loses points on a draw
        (1200, 1400, True, (1208, 1392)),
        (1200, 1200, True, (1200, 1200)),
    ],
)
def test_update_ratings(
    winner: int, loser: int, is_draw: bool, expected: tuple[int, int]
) -> None:
    assert update_ratings(winner, loser, is_draw) == expected


def test_changes_are_truncated_toward_zero() -> None:
    """32 * 463 / 1000 = 14.816 both ways: the loser drops 14, not 15"""
    assert update_ratings(1230, 1200) == (1244, 1186)


def test_rating_floor() -> None:
    winner, loser = update_ratings(2000, RATING_FLOOR)
    assert winner == 2001
    assert loser == RATING_FLOOR


def test_rating_never_drops_below_floor() -> None:
    _, loser = update_ratings(1200, 90)
    assert loser >= RATING_FLOOR


@pytest.mark.parametrize("white, black", [(1200, 1200), (1500, 1300), (1000, 1800)])
def test_draw_is_symmetric(white: int, black: int) -> None:
    """Swapping the labels of a drawn game swaps the result"""
    white_after, black_after = update_ratings(white, black, is_draw=True)
    assert update_ratings(black, white, is_draw=True) == (black_after, white_after)


@pytest.mark.parametrize("winner, loser", [(1200, 1200), (1500, 1300), (1000, 1800)])
def test_winner_never_loses_points(winner: int, loser: int) -> None:
    winner_after, loser_after = update_ratings(winner, loser)
    assert winner_after >= winner
    assert loser_after <= loser

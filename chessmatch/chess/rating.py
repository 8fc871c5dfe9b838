"""
Rating Updater
----

Integer-only approximation of the Elo update. The logistic expected-score curve is replaced by a fixed
lookup table (expected score x1000 for the higher rated player), so results are bit-for-bit reproducible.
"""

K_FACTOR = 32
SCALE = 1000
MAX_RATING_DIFF = 800
RATING_FLOOR = 100

# (upper bound of rating difference, expected score x1000 of the higher rated side)
EXPECTED_SCORE_TABLE: tuple[tuple[int, int], ...] = (
    (25, 500),
    (50, 537),
    (100, 640),
    (150, 691),
    (200, 760),
    (300, 849),
    (400, 909),
)
EXPECTED_SCORE_BEYOND_TABLE = 950


def expected_score_of_favourite(rating_diff: int) -> int:
    """Expected score x1000 of the higher rated side, given the (absolute) rating difference."""
    diff = min(abs(rating_diff), MAX_RATING_DIFF)
    for upper_bound, expected in EXPECTED_SCORE_TABLE:
        if diff <= upper_bound:
            return expected
    return EXPECTED_SCORE_BEYOND_TABLE


def _rating_change(actual: int, expected: int) -> int:
    """K * (actual - expected) / SCALE, truncated toward zero (// alone would floor negative values)."""
    numerator = K_FACTOR * (actual - expected)
    change = abs(numerator) // SCALE
    return change if numerator >= 0 else -change


def _apply_change(rating: int, change: int) -> int:
    return max(max(rating + change, 0), RATING_FLOOR)


def update_ratings(
    winner_rating: int, loser_rating: int, is_draw: bool = False
) -> tuple[int, int]:
    """
    New (winner, loser) ratings.

    For a draw the labels winner/loser only fix the order of the returned pair.
    """
    favourite_expected = expected_score_of_favourite(winner_rating - loser_rating)
    if winner_rating >= loser_rating:
        winner_expected, loser_expected = favourite_expected, SCALE - favourite_expected
    else:
        winner_expected, loser_expected = SCALE - favourite_expected, favourite_expected

    if is_draw:
        winner_actual, loser_actual = SCALE // 2, SCALE // 2
    else:
        winner_actual, loser_actual = SCALE, 0

    return (
        _apply_change(winner_rating, _rating_change(winner_actual, winner_expected)),
        _apply_change(loser_rating, _rating_change(loser_actual, loser_expected)),
    )

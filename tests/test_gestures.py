"""Gesture classification tests."""

import math

import pytest

from scrollnet.core.errors import InvalidInput
from scrollnet.core.gestures import EMOJI_REACTIONS, Gesture, classify, classify_emoji

T = 50.0


@pytest.mark.parametrize(
    "dx,dy",
    [(51, 0), (120, 30), (80, -80), (80, 80), (300, -299), (1000, 0.5)],
)
def test_horizontal_right_is_like(dx, dy):
    assert classify(dx, dy, T).gesture is Gesture.LIKE


@pytest.mark.parametrize(
    "dx,dy",
    [(-51, 0), (-120, 30), (-80, -80), (-80, 80), (-300, 299)],
)
def test_horizontal_left_is_dislike(dx, dy):
    assert classify(dx, dy, T).gesture is Gesture.DISLIKE


def test_dominant_horizontal_sign_decides_like_or_dislike():
    for magnitude in (T + 1, 75, 200, 1000):
        for dy in (0, magnitude / 2, -magnitude, magnitude):
            assert classify(magnitude, dy, T).gesture is Gesture.LIKE
            assert classify(-magnitude, dy, T).gesture is Gesture.DISLIKE


def test_diagonal_tie_favours_horizontal():
    assert classify(100, -100, T).gesture is Gesture.LIKE
    assert classify(-100, -100, T).gesture is Gesture.DISLIKE


@pytest.mark.parametrize("dx,dy", [(0, -51), (10, -200), (-60, -61)])
def test_upward_swipe_is_next(dx, dy):
    assert classify(dx, dy, T).gesture is Gesture.NEXT


@pytest.mark.parametrize("dx,dy", [(0, 0), (10, -10), (49, 49), (50, 0), (0, -50), (-20, 40)])
def test_short_gesture_is_tap(dx, dy):
    result = classify(dx, dy, T)
    assert result.gesture is Gesture.TAP
    assert not result.is_reaction
    assert not result.advances_feed


def test_downward_swipe_is_tap():
    assert classify(0, 300, T).gesture is Gesture.TAP


def test_classification_flags():
    like = classify(100, 0, T)
    assert like.is_reaction and like.advances_feed
    assert like.event_name == "like"

    nxt = classify(0, -100, T)
    assert not nxt.is_reaction and nxt.advances_feed


def test_emoji_buttons():
    assert len(EMOJI_REACTIONS) == 8
    for key in EMOJI_REACTIONS:
        result = classify_emoji(key)
        assert result.gesture is Gesture.EMOJI
        assert result.event_name == f"emoji:{key}"
        assert result.is_reaction
        assert not result.advances_feed


def test_unknown_emoji_rejected():
    with pytest.raises(InvalidInput):
        classify_emoji("sad")


@pytest.mark.parametrize("dx,dy", [(math.nan, 0), (0, math.inf)])
def test_non_finite_delta_rejected(dx, dy):
    with pytest.raises(InvalidInput):
        classify(dx, dy, T)


def test_threshold_must_be_positive():
    with pytest.raises(InvalidInput):
        classify(100, 0, 0)

"""Feedback cadence tests."""

import pytest

from scrollnet.core.cadence import FeedbackCadenceTracker
from scrollnet.core.identity import Identity

ALICE = Identity.anonymous("abcabcab-0000-4000-8000-000000000abc")
BOB = Identity.authenticated("5f0c8a4e-2b7d-4c1e-9a3f-6d2e8b1c7a90")


@pytest.mark.parametrize("cadence", [1, 5, 10])
def test_fires_every_n_videos(cadence):
    tracker = FeedbackCadenceTracker(cadence)
    fired = []
    for i in range(1, 2 * cadence + 1):
        signal = tracker.on_video_consumed(ALICE, f"v{i}")
        if signal.feedback_required:
            fired.append(i)

    assert fired == [cadence, 2 * cadence]


def test_target_is_nth_video_of_window():
    tracker = FeedbackCadenceTracker(5)
    signals = [tracker.on_video_consumed(ALICE, f"v{i}") for i in range(1, 6)]

    assert [s.feedback_required for s in signals] == [False, False, False, False, True]
    assert signals[-1].video_id_for_feedback == "v5"
    assert all(s.video_id_for_feedback is None for s in signals[:-1])


def test_counter_resets_after_firing():
    tracker = FeedbackCadenceTracker(3)
    for i in range(3):
        tracker.on_video_consumed(ALICE, f"v{i}")
    assert tracker.count(ALICE) == 0
    assert tracker.remaining(ALICE) == 3


def test_reset_starts_a_new_window():
    tracker = FeedbackCadenceTracker(5)
    for i in range(4):
        tracker.on_video_consumed(ALICE, f"v{i}")
    tracker.reset(ALICE)

    signals = [tracker.on_video_consumed(ALICE, f"w{i}") for i in range(5)]
    assert [s.feedback_required for s in signals] == [False] * 4 + [True]


def test_counters_are_per_identity():
    tracker = FeedbackCadenceTracker(2)
    assert not tracker.on_video_consumed(ALICE, "a1").feedback_required
    assert not tracker.on_video_consumed(BOB, "b1").feedback_required
    assert tracker.on_video_consumed(ALICE, "a2").video_id_for_feedback == "a2"
    assert tracker.count(BOB) == 1


def test_cadence_must_be_positive():
    with pytest.raises(ValueError):
        FeedbackCadenceTracker(0)

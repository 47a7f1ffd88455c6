"""Feedback submission client tests."""

import asyncio

import pytest
from conftest import ANON_ID, FakeBackend, make_video

from scrollnet.client.feedback import FeedbackSubmissionClient, is_store_video_id
from scrollnet.core.cadence import FeedbackCadenceTracker
from scrollnet.core.errors import ValidationError
from scrollnet.core.feedback import FeedbackAnswers
from scrollnet.core.identity import Identity
from scrollnet.core.telemetry import LoggingTelemetrySink

ANON = Identity.anonymous(ANON_ID)
VIDEO = make_video(3)["id"]


def run(coro):
    return asyncio.run(coro)


def tracker_with(count: int, cadence: int = 5) -> FeedbackCadenceTracker:
    tracker = FeedbackCadenceTracker(cadence)
    for i in range(count):
        tracker.on_video_consumed(ANON, f"v{i}")
    return tracker


@pytest.mark.parametrize(
    "answers",
    [{}, {"q1": ""}, {"q1": "   "}, None, FeedbackAnswers(), FeedbackAnswers(categories={"engagement": 0})],
)
def test_empty_answers_rejected_without_network(answers):
    backend = FakeBackend()
    tracker = tracker_with(3)
    client = FeedbackSubmissionClient(backend.api(), tracker)

    with pytest.raises(ValidationError):
        run(client.submit(ANON, VIDEO, answers))

    assert backend.requests == []
    assert backend.feedback == []
    assert tracker.count(ANON) == 3


def test_single_answer_is_enough():
    backend = FakeBackend()
    client = FeedbackSubmissionClient(backend.api(), tracker_with(3))

    result = run(client.submit(ANON, VIDEO, {"q1": "x"}))

    assert result.persisted
    assert not result.accepted_locally
    assert backend.posted("/feedback") == [
        {"answers": {"q1": "x"}, "videoId": VIDEO, "identityId": ANON_ID}
    ]


def test_structured_answers_sent_camel_case():
    backend = FakeBackend()
    client = FeedbackSubmissionClient(backend.api(), FeedbackCadenceTracker())
    answers = FeedbackAnswers(
        rating=4,
        categories={"content_quality": 5, "engagement": 0},
        would_recommend=False,
        comments="  Nice pacing ",
        improvement_suggestions="",
    )

    run(client.submit(ANON, VIDEO, answers))

    assert backend.posted("/feedback")[0] == {
        "rating": 4,
        "categories": {"content_quality": 5},
        "wouldRecommend": False,
        "comments": "Nice pacing",
        "videoId": VIDEO,
        "identityId": ANON_ID,
    }


def test_out_of_range_rating_rejected():
    client = FeedbackSubmissionClient(FakeBackend().api(), FeedbackCadenceTracker())
    with pytest.raises(ValidationError):
        run(client.submit(ANON, VIDEO, FeedbackAnswers(rating=7)))


def test_successful_submit_resets_cadence():
    tracker = tracker_with(4)
    client = FeedbackSubmissionClient(FakeBackend().api(), tracker)
    run(client.submit(ANON, VIDEO, {"q1": "x"}))
    assert tracker.count(ANON) == 0


def test_store_failure_accepted_locally_and_resets_cadence():
    backend = FakeBackend()
    backend.failing.add("feedback")
    telemetry = LoggingTelemetrySink()
    tracker = tracker_with(4)
    client = FeedbackSubmissionClient(backend.api(), tracker, telemetry)

    result = run(client.submit(ANON, VIDEO, {"q1": "x"}))

    assert result.accepted_locally
    assert not result.persisted
    assert tracker.count(ANON) == 0
    assert telemetry.named("feedback.accepted_locally")


def test_multiple_submissions_for_same_video_kept():
    backend = FakeBackend()
    client = FeedbackSubmissionClient(backend.api(), FeedbackCadenceTracker())

    async def submit_twice():
        await client.submit(ANON, VIDEO, {"q1": "first"})
        await client.submit(ANON, VIDEO, {"q1": "second"})

    run(submit_twice())
    assert [f["answers"]["q1"] for f in backend.feedback] == ["first", "second"]


def test_skip_resets_without_record():
    backend = FakeBackend()
    tracker = tracker_with(4)
    client = FeedbackSubmissionClient(backend.api(), tracker)

    client.skip(ANON)

    assert tracker.count(ANON) == 0
    assert backend.requests == []


def test_check_required():
    backend = FakeBackend()
    client = FeedbackSubmissionClient(backend.api(), FeedbackCadenceTracker())

    assert run(client.check_required(ANON)) is True
    assert backend.requests[0].url.params["identityId"] == ANON_ID


def test_check_required_unknown_when_backend_down():
    backend = FakeBackend()
    backend.unreachable = True
    client = FeedbackSubmissionClient(backend.api(), FeedbackCadenceTracker())
    assert run(client.check_required(ANON)) is None


def test_check_required_skipped_for_non_uuid_identity():
    backend = FakeBackend()
    client = FeedbackSubmissionClient(backend.api(), FeedbackCadenceTracker())
    assert run(client.check_required(Identity.authenticated("anonymous-user"))) is None
    assert backend.requests == []


def test_placeholder_video_target_is_dropped():
    backend = FakeBackend()
    client = FeedbackSubmissionClient(backend.api(), FeedbackCadenceTracker())

    result = run(client.submit(ANON, "fallback-2", {"q1": "x"}))

    assert result.persisted
    assert backend.posted("/feedback") == [{"answers": {"q1": "x"}, "identityId": ANON_ID}]


@pytest.mark.parametrize(
    "video_id,expected",
    [(VIDEO, True), ("5F0C8A4E-2B7D-4C1E-9A3F-6D2E8B1C7A90", True), ("fallback-1", False), (None, False)],
)
def test_is_store_video_id(video_id, expected):
    assert is_store_video_id(video_id) is expected

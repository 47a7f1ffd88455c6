"""Interaction store client tests."""

import asyncio

import pytest
from conftest import ANON_ID, USER_ID, FakeBackend, make_video

from scrollnet.client.interactions import InteractionStoreClient
from scrollnet.core.errors import InvalidInput
from scrollnet.core.identity import Identity
from scrollnet.core.interactions import EmojiPayload, InteractionType, ViewPayload
from scrollnet.core.telemetry import LoggingTelemetrySink

VIDEO = make_video(1)["id"]
ANON = Identity.anonymous(ANON_ID)


def run(coro):
    return asyncio.run(coro)


def test_record_like_posts_identity_video_and_type():
    backend = FakeBackend()
    client = InteractionStoreClient(backend.api())

    result = run(client.record(ANON, VIDEO, "like"))

    assert result.persisted
    assert result.event.type is InteractionType.LIKE
    assert backend.posted("/interactions") == [
        {"identityId": ANON_ID, "videoId": VIDEO, "type": "like", "data": {}}
    ]


def test_repeat_record_overwrites_single_row():
    backend = FakeBackend()
    client = InteractionStoreClient(backend.api())

    async def twice():
        first = await client.record(ANON, VIDEO, InteractionType.VIEW, ViewPayload(duration_ms=1000))
        second = await client.record(ANON, VIDEO, InteractionType.VIEW, ViewPayload(duration_ms=4500))
        return first, second

    first, second = run(twice())

    rows = [k for k in backend.interactions if k == (ANON_ID, VIDEO, "view")]
    assert len(rows) == 1
    assert backend.interactions[(ANON_ID, VIDEO, "view")]["data"] == {"durationMs": 4500}
    assert first.interaction_id == second.interaction_id


def test_emoji_overwrites_previous_emoji():
    backend = FakeBackend()
    client = InteractionStoreClient(backend.api())

    async def react():
        await client.record(ANON, VIDEO, "emoji", EmojiPayload("fire"))
        await client.record(ANON, VIDEO, "emoji", EmojiPayload("love"))

    run(react())

    assert len(backend.interactions) == 1
    stored = backend.interactions[(ANON_ID, VIDEO, "emoji")]["data"]
    assert stored == {"key": "love", "emoji": "❤️", "label": "Love"}


def test_non_uuid_identity_is_sent_as_unknown_user():
    backend = FakeBackend()
    client = InteractionStoreClient(backend.api())

    result = run(client.record(Identity.authenticated("placeholder-user"), VIDEO, "dislike"))

    assert result.persisted
    body = backend.posted("/interactions")[0]
    assert "identityId" not in body
    assert body["type"] == "dislike"


def test_authenticated_uuid_identity_is_sent():
    backend = FakeBackend()
    client = InteractionStoreClient(backend.api())
    run(client.record(Identity.authenticated(USER_ID), VIDEO, "like"))
    assert backend.posted("/interactions")[0]["identityId"] == USER_ID


@pytest.mark.parametrize(
    "type_,payload",
    [
        ("share", None),
        ("emoji", None),
        ("emoji", EmojiPayload("sad")),
        ("like", EmojiPayload("fire")),
        ("view", EmojiPayload("fire")),
        ("view", ViewPayload(duration_ms=-1)),
    ],
)
def test_invalid_input_fails_before_network(type_, payload):
    backend = FakeBackend()
    client = InteractionStoreClient(backend.api())

    with pytest.raises(InvalidInput):
        run(client.record(ANON, VIDEO, type_, payload))
    assert backend.requests == []


def test_missing_video_or_identity_rejected():
    backend = FakeBackend()
    client = InteractionStoreClient(backend.api())

    with pytest.raises(InvalidInput):
        run(client.record(ANON, "", "like"))
    with pytest.raises(InvalidInput):
        run(client.record(None, VIDEO, "like"))
    assert backend.requests == []


def test_store_error_is_soft_and_reported():
    backend = FakeBackend()
    backend.failing.add("interactions")
    telemetry = LoggingTelemetrySink()
    client = InteractionStoreClient(backend.api(), telemetry)

    result = run(client.record(ANON, VIDEO, "like"))

    assert not result.persisted
    assert "500" in result.error
    assert len(telemetry.named("interaction.not_persisted")) == 1
    assert len(backend.requests) == 1


def test_unreachable_store_is_soft_and_not_retried():
    backend = FakeBackend()
    backend.unreachable = True
    telemetry = LoggingTelemetrySink()
    client = InteractionStoreClient(backend.api(), telemetry)

    result = run(client.record(ANON, VIDEO, "like"))

    assert not result.persisted
    assert len(backend.requests) == 1
    assert telemetry.named("interaction.not_persisted")

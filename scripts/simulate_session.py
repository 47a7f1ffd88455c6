#!/usr/bin/env python3
"""
Drive a swipe session against a running backend.

Steps:
1. Load the feed
2. Swipe through videos with a fixed gesture pattern
3. React with an emoji on every third video
4. Answer the feedback prompt whenever it opens
5. Check the server-side cadence endpoint

Usage:
    python scripts/simulate_session.py [--base-url http://localhost:8000] [--swipes 12]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from scrollnet.client import ScrollNetAPI, ScrollSession
from scrollnet.client.feed import EndOfFeed
from scrollnet.config import get_settings
from scrollnet.core.feedback import FeedbackAnswers

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# (dx, dy) per swipe: right, left, up
GESTURES = [(120, 10), (-140, 20), (5, -160)]


async def simulate(base_url: str, swipes: int, record_views: bool) -> bool:
    settings = get_settings()
    session = ScrollSession(
        api=ScrollNetAPI(base_url=base_url), settings=settings, record_views=record_views
    )

    logger.info("=" * 60)
    logger.info(f"Session identity: {session.identity.id} ({session.identity.kind.value})")
    logger.info("=" * 60)

    video = await session.start()
    if session.state.cursor.degraded:
        logger.warning("Backend unreachable, feed is showing placeholder content")

    prompts = 0
    for i in range(swipes):
        if isinstance(video, EndOfFeed):
            logger.info("All caught up, feed exhausted")
            break

        if i % 3 == 2:
            await session.on_emoji("fire")
            logger.info(f"  🔥 on {video.title}")

        dx, dy = GESTURES[i % len(GESTURES)]
        outcome = await session.on_gesture(dx, dy)
        logger.info(f"{i + 1:>3}. {outcome.classification.event_name:<8} {video.title}")
        video = outcome.video

        if session.state.feedback_open:
            prompts += 1
            result = await session.submit_feedback(
                FeedbackAnswers(rating=4, comments="Simulated session feedback")
            )
            logger.info(
                f"     feedback on {result.video_id}: "
                f"{'stored' if result.persisted else 'accepted locally'}"
            )

    await session.drain()

    failed = session.telemetry.named("interaction.not_persisted")
    logger.info(f"Feedback prompts answered: {prompts}")
    logger.info(f"Interaction writes not persisted: {len(failed)}")

    required = await session.feedback.check_required(session.identity)
    logger.info(f"Server-side feedback required: {required}")

    await session.close()
    return not failed


async def main():
    parser = argparse.ArgumentParser(description="Simulate a ScrollNet swipe session")
    parser.add_argument("--base-url", default=get_settings().api_base_url)
    parser.add_argument("--swipes", type=int, default=12)
    parser.add_argument("--record-views", action="store_true")
    args = parser.parse_args()

    ok = await simulate(args.base_url, args.swipes, args.record_views)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    asyncio.run(main())

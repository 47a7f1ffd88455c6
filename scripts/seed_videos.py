#!/usr/bin/env python3
"""
Seed the videos table for local development.

Reads a JSON list of videos (title, sourceUrl, optional description,
durationSeconds, tags, thumbnailUrl) and inserts them as active rows. Media
is expected to already be publicly reachable; nothing is uploaded.

Usage:
    python scripts/seed_videos.py [--file path/to/videos.json] [--deactivate VIDEO_ID ...]
"""

import argparse
import asyncio
import json
import logging
import re
import sys
import uuid
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from scrollnet.database import Base, async_session_maker, engine, get_db_context
from scrollnet.models import Video
from scrollnet.services import VideoService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SAMPLE_VIDEOS = [
    {
        "title": "Big Buck Bunny",
        "description": "Open movie sample",
        "sourceUrl": "https://commondatastorage.googleapis.com/gtv-videos-bucket/sample/BigBuckBunny.mp4",
        "durationSeconds": 596,
        "tags": ["animation", "sample"],
    },
    {
        "title": "Elephants Dream",
        "description": "Open movie sample",
        "sourceUrl": "https://commondatastorage.googleapis.com/gtv-videos-bucket/sample/ElephantsDream.mp4",
        "durationSeconds": 653,
        "tags": ["animation", "sample"],
    },
    {
        "title": "For Bigger Blazes",
        "sourceUrl": "https://commondatastorage.googleapis.com/gtv-videos-bucket/sample/ForBiggerBlazes.mp4",
        "durationSeconds": 15,
        "tags": ["short"],
    },
]


def title_from_url(url: str) -> str:
    """Derive a readable title from a media file name."""
    name = url.rsplit("/", 1)[-1]
    name = re.sub(r"\.[^/.]+$", "", name)
    name = re.sub(r"^\d+_[a-z0-9]+_", "", name)
    name = name.replace("_", " ").strip()
    return name.title() or "Untitled Video"


async def create_tables():
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")


async def seed_videos(items: list, skip_existing: bool = True) -> int:
    inserted = 0
    skipped = 0
    async with async_session_maker() as session:
        for item in items:
            source_url = item.get("sourceUrl")
            if not source_url:
                logger.warning(f"Skipping item without sourceUrl: {item}")
                continue

            if skip_existing:
                existing = await session.execute(
                    select(Video.id).where(Video.source_url == source_url)
                )
                if existing.scalar():
                    skipped += 1
                    continue

            session.add(
                Video(
                    id=uuid.UUID(item["id"]) if item.get("id") else uuid.uuid4(),
                    title=item.get("title") or title_from_url(source_url),
                    description=item.get("description") or "",
                    source_url=source_url,
                    thumbnail_url=item.get("thumbnailUrl"),
                    duration_seconds=item.get("durationSeconds"),
                    mime_type=item.get("mimeType"),
                    tags=list(item.get("tags") or []),
                    extended_metadata=item.get("metadata") or {},
                )
            )
            inserted += 1
            # Separate commits give each row its own created_at
            await session.commit()

    logger.info(f"Inserted {inserted} videos, skipped {skipped} existing")
    return inserted


async def deactivate(video_ids: list) -> int:
    """Soft-delete videos so they drop out of the feed."""
    deactivated = 0
    async with get_db_context() as session:
        service = VideoService(session)
        for video_id in video_ids:
            if await service.deactivate(uuid.UUID(video_id)):
                deactivated += 1
            else:
                logger.warning(f"Video {video_id} not found")
    return deactivated


async def main():
    parser = argparse.ArgumentParser(description="Seed ScrollNet videos")
    parser.add_argument("--file", help="JSON file with a list of videos")
    parser.add_argument("--no-skip", action="store_true", help="Insert even if the URL exists")
    parser.add_argument("--deactivate", nargs="*", default=[], help="Video IDs to soft-delete")
    args = parser.parse_args()

    await create_tables()

    if args.deactivate:
        await deactivate(args.deactivate)
    else:
        if args.file:
            with open(args.file, "r", encoding="utf-8") as f:
                items = json.load(f)
        else:
            items = SAMPLE_VIDEOS
        await seed_videos(items, skip_existing=not args.no_skip)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())

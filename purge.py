"""Delete every video on the configured Stream account.

Lists what would be removed unless run with --yes.
"""
import argparse
import asyncio
import logging
import sys
from backend.app.core.config import Settings
from backend.app.core.errors import RelayError
from backend.app.core.log import setup_logging
from backend.app.services.relay import StreamRelay

logger = logging.getLogger("purge")

async def purge(relay: StreamRelay, confirm: bool) -> int:
    if not confirm:
        videos = await relay.list_videos()
        for video in videos:
            print(f"{video.uid}  {video.name}")
        print(f"{len(videos)} videos would be deleted. Re-run with --yes to delete them.")
        return 0

    report = await relay.delete_all()
    logger.info("Deleted %d videos, %d failed", len(report.deleted), len(report.failed))
    return 0 if report.ok else 1

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--yes", action="store_true", help="actually delete the videos")
    args = parser.parse_args(argv)

    settings = Settings()
    setup_logging(settings.LOG_LEVEL)
    if not settings.has_credentials:
        logger.error("Missing credentials: %s", ", ".join(settings.missing_credentials()))
        return 1

    try:
        return asyncio.run(purge(StreamRelay(settings), args.yes))
    except RelayError as e:
        logger.error(e.message)
        return 1

if __name__ == "__main__":
    sys.exit(main())

import logging
import sys

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once for whichever entry point is running."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=FORMAT,
        stream=sys.stdout,
    )

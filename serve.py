"""Local HTTPS server for development against the browser client."""
import logging
import os
import sys
import uvicorn
from backend.app.core.config import Settings
from backend.app.core.log import setup_logging
from backend.app.main import create_app

logger = logging.getLogger("serve")

def ssl_options(settings: Settings) -> dict:
    certfile, keyfile = settings.SSL_CERTFILE, settings.SSL_KEYFILE
    if not certfile and not keyfile:
        return {}
    if not (certfile and keyfile):
        raise ValueError("SSL_CERTFILE and SSL_KEYFILE must be set together")
    for path in (certfile, keyfile):
        if not os.path.isfile(path):
            raise ValueError(f"TLS file not found: {path}")
    return {"ssl_certfile": certfile, "ssl_keyfile": keyfile}

def main() -> int:
    settings = Settings()
    setup_logging(settings.LOG_LEVEL)

    if not settings.has_credentials:
        logger.error("Missing credentials: %s", ", ".join(settings.missing_credentials()))
        return 1

    try:
        tls = ssl_options(settings)
    except ValueError as e:
        logger.error(str(e))
        return 1

    scheme = "https" if tls else "http"
    logger.info("Relay listening on %s://%s:%s", scheme, settings.HOST, settings.PORT)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower(), **tls)
    return 0

if __name__ == "__main__":
    sys.exit(main())

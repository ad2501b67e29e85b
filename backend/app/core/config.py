from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "StreamRelay"

    # Upstream credentials, required before serving traffic
    CLOUDFLARE_ACCOUNT_ID: str = ""
    CLOUDFLARE_API_TOKEN: str = ""

    CLOUDFLARE_API_BASE: str = "https://api.cloudflare.com/client/v4"
    PLAYBACK_BASE_URL: str = "https://iframe.videodelivery.net"

    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    # Upload constraints
    MAX_UPLOAD_BYTES: int = 500 * 1024 * 1024
    ALLOWED_VIDEO_TYPES: List[str] = ["video/mp4", "video/webm", "video/ogg"]

    # None leaves outbound calls without a deadline
    UPSTREAM_TIMEOUT: Optional[float] = None

    # Local server
    HOST: str = "localhost"
    PORT: int = 3000
    SSL_CERTFILE: Optional[str] = None
    SSL_KEYFILE: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True
        env_file = ".env"
        extra = "ignore"

    @property
    def has_credentials(self) -> bool:
        return not self.missing_credentials()

    def missing_credentials(self) -> List[str]:
        missing = []
        if not self.CLOUDFLARE_ACCOUNT_ID:
            missing.append("CLOUDFLARE_ACCOUNT_ID")
        if not self.CLOUDFLARE_API_TOKEN:
            missing.append("CLOUDFLARE_API_TOKEN")
        return missing

settings = Settings()

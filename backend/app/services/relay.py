import logging
import httpx
from urllib.parse import quote
from starlette.datastructures import UploadFile
from typing import Any, List, Optional
from backend.app.core.config import Settings
from backend.app.core.errors import (
    FileTooLarge,
    InternalError,
    InvalidFile,
    MissingCredentials,
    MissingIdentifier,
    RelayError,
    UnsupportedFormat,
    UpstreamError,
)
from backend.app.models.schemas import (
    CleanupReport,
    DeleteResult,
    StreamEnvelope,
    StreamVideo,
    UploadResult,
)

logger = logging.getLogger(__name__)

UPLOAD_FAILED = "Error al subir el video"
DELETE_FAILED = "Error al eliminar el video"
LIST_FAILED = "Error al listar los videos"


class StreamRelay:
    """Forwards uploads and deletions to the Stream API on behalf of the browser.

    The bearer token only ever travels on outbound calls; clients receive the
    normalized payloads built here.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    # Upstream plumbing

    def _stream_url(self, video_id: str = None) -> str:
        if not self.settings.has_credentials:
            missing = ", ".join(self.settings.missing_credentials())
            logger.error("Missing upstream credentials: %s", missing)
            raise MissingCredentials()
        base = self.settings.CLOUDFLARE_API_BASE.rstrip("/")
        url = f"{base}/accounts/{self.settings.CLOUDFLARE_ACCOUNT_ID}/stream"
        if video_id:
            url = f"{url}/{quote(video_id, safe='')}"
        return url

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.settings.CLOUDFLARE_API_TOKEN}"}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport, timeout=self.settings.UPSTREAM_TIMEOUT)

    def playback_url(self, video_id: str) -> str:
        return f"{self.settings.PLAYBACK_BASE_URL.rstrip('/')}/{video_id}"

    @staticmethod
    def _envelope(response: httpx.Response) -> StreamEnvelope:
        try:
            return StreamEnvelope.model_validate(response.json())
        except ValueError:
            # Non-JSON error pages from the edge in front of the API
            return StreamEnvelope(success=False)

    # Upload

    def validate_upload(self, value: Any) -> UploadFile:
        if not isinstance(value, UploadFile):
            raise InvalidFile()

        if value.content_type not in self.settings.ALLOWED_VIDEO_TYPES:
            raise UnsupportedFormat()

        max_size = self.settings.MAX_UPLOAD_BYTES
        if value.size is not None and value.size > max_size:
            raise FileTooLarge(f"El archivo excede el tamaño máximo de {max_size // (1024 * 1024)} MB.")

        return value

    async def upload(self, value: Any) -> UploadResult:
        file = self.validate_upload(value)
        url = self._stream_url()

        try:
            content = await file.read()
            if len(content) > self.settings.MAX_UPLOAD_BYTES:
                raise FileTooLarge()

            files = {"file": (file.filename or "video", content, file.content_type)}
            async with self._client() as client:
                response = await client.post(url, headers=self._headers(), files=files)

            data = self._envelope(response)
            if not data.success:
                logger.error("Upstream upload failed (%s): %s", response.status_code, response.text)
                raise UpstreamError(data.first_error(UPLOAD_FAILED))

            video = StreamVideo.model_validate(data.result)
            logger.info("Uploaded %s as %s", file.filename, video.uid)
            return UploadResult(
                videoId=video.uid,
                playbackUrl=self.playback_url(video.uid),
                thumbnail=video.thumbnail,
                duration=video.duration,
            )
        except RelayError:
            raise
        except Exception as e:
            logger.exception("Unexpected error relaying upload: %s", e)
            raise InternalError() from e

    # Delete

    async def delete(self, video_id: Optional[str]) -> DeleteResult:
        if not video_id or not video_id.strip():
            raise MissingIdentifier()
        url = self._stream_url(video_id)

        try:
            async with self._client() as client:
                response = await client.delete(url, headers=self._headers())

            if not response.is_success:
                logger.error("Upstream delete of %s failed (%s): %s", video_id, response.status_code, response.text)
                raise UpstreamError(self._envelope(response).first_error(DELETE_FAILED))

            logger.info("Deleted video %s", video_id)
            return DeleteResult(success=True, message=f"Video {video_id} eliminado")
        except RelayError:
            raise
        except Exception as e:
            logger.exception("Unexpected error relaying delete of %s: %s", video_id, e)
            raise InternalError() from e

    # Administrative

    async def list_videos(self) -> List[StreamVideo]:
        url = self._stream_url()

        try:
            async with self._client() as client:
                response = await client.get(url, headers=self._headers())

            data = self._envelope(response)
            if not response.is_success or not data.success:
                logger.error("Upstream list failed (%s): %s", response.status_code, response.text)
                raise UpstreamError(data.first_error(LIST_FAILED))

            return [StreamVideo.model_validate(v) for v in data.result or []]
        except RelayError:
            raise
        except Exception as e:
            logger.exception("Unexpected error listing videos: %s", e)
            raise InternalError() from e

    async def delete_all(self) -> CleanupReport:
        """Deletes every video on the account, one at a time.

        A failed deletion is logged and recorded; the loop moves on to the
        next video.
        """
        videos = await self.list_videos()
        report = CleanupReport()
        logger.info("Deleting %d videos", len(videos))

        for video in videos:
            try:
                await self.delete(video.uid)
                report.deleted.append(video.uid)
                logger.info("Removed %s (%s)", video.uid, video.name)
            except RelayError as e:
                report.failed[video.uid] = e.message
                logger.warning("Could not remove %s: %s", video.uid, e.message)

        return report

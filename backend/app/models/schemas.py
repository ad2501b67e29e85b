from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional, Union

class UploadResult(BaseModel):
    videoId: str
    playbackUrl: str
    thumbnail: Optional[str] = None
    duration: Optional[Union[int, float]] = None

class DeleteResult(BaseModel):
    success: bool
    message: str

class ErrorResponse(BaseModel):
    error: str

# Upstream payloads

class UpstreamMessage(BaseModel):
    code: Optional[int] = None
    message: Optional[str] = None

class StreamEnvelope(BaseModel):
    """Response wrapper returned by every provider endpoint."""
    success: bool = False
    errors: List[UpstreamMessage] = []
    messages: List[UpstreamMessage] = []
    result: Optional[Any] = None

    def first_error(self, default: str) -> str:
        if self.errors and self.errors[0].message:
            return self.errors[0].message
        return default

class StreamVideo(BaseModel):
    model_config = ConfigDict(extra="allow")

    uid: str
    thumbnail: Optional[str] = None
    duration: Optional[Union[int, float]] = None
    meta: Optional[Dict[str, Any]] = None

    @property
    def name(self) -> str:
        return str((self.meta or {}).get("name") or self.uid)

class CleanupReport(BaseModel):
    deleted: List[str] = []
    failed: Dict[str, str] = {}

    @property
    def ok(self) -> bool:
        return not self.failed

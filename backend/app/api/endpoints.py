from fastapi import APIRouter, Depends, Request
from backend.app.core.errors import MissingIdentifier
from backend.app.models.schemas import DeleteResult, UploadResult
from backend.app.services.relay import StreamRelay

router = APIRouter()

def get_relay(request: Request) -> StreamRelay:
    return request.app.state.relay

@router.post("/upload-video-direct", response_model=UploadResult)
async def upload_video_direct(request: Request, relay: StreamRelay = Depends(get_relay)):
    # Parsed by hand: a text value under "file" is a client error, not a 422
    form = await request.form()
    try:
        return await relay.upload(form.get("file"))
    finally:
        await form.close()

@router.delete("/delete-video/{video_id}", response_model=DeleteResult)
async def delete_video(video_id: str, relay: StreamRelay = Depends(get_relay)):
    return await relay.delete(video_id)

@router.delete("/delete-video", include_in_schema=False)
@router.delete("/delete-video/", include_in_schema=False)
async def delete_video_without_id():
    raise MissingIdentifier()

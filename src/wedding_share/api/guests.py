"""Guest upload flow endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from wedding_share.api.schemas import NoteRequest
from wedding_share.api.serializers import upload_payload
from wedding_share.domain.uploads import SelectedFile
from wedding_share.services.previews import detect_mime_type
from wedding_share.services.uploads import UploadPipeline  # noqa: TC001

if TYPE_CHECKING:
    from wedding_share.containers import AppContainer

router = APIRouter(prefix="/guest/sessions", tags=["guest"])

_DEFAULT_FILENAME = "upload.jpg"
_ACCEPTED_TYPES = frozenset({"image/jpeg", "image/png", "image/webp", "image/gif"})


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def get_pipeline(session_id: UUID, request: Request) -> UploadPipeline:
    """Resolve the guest session or answer 404."""
    pipeline = _container(request).guest_sessions.get(session_id)
    if pipeline is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return pipeline


def _image_content_type(request: Request, content: bytes) -> str:
    """Declared image type of the body, sniffed when the header is absent."""
    header = request.headers.get("content-type")
    if not header:
        return detect_mime_type(content)
    content_type = header.split(";", 1)[0].strip().lower()
    if content_type not in _ACCEPTED_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Photo must be a JPEG, PNG, WebP or GIF image.",
        )
    return content_type


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(request: Request) -> dict[str, object]:
    """Start a guest upload session."""
    container = _container(request)
    session_id, pipeline = container.guest_sessions.create()
    return {
        "session_id": str(session_id),
        "caption_available": container.caption_service.is_configured(),
        "upload": upload_payload(pipeline.snapshot),
    }


@router.get("/{session_id}")
async def get_session(
    pipeline: UploadPipeline = Depends(get_pipeline),
) -> dict[str, object]:
    return upload_payload(pipeline.snapshot)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(session_id: UUID, request: Request) -> None:
    _container(request).guest_sessions.close(session_id)


@router.post("/{session_id}/file")
async def select_file(
    request: Request,
    filename: str = _DEFAULT_FILENAME,
    pipeline: UploadPipeline = Depends(get_pipeline),
) -> dict[str, object]:
    """Take the raw request body as the guest's photo."""
    content = await request.body()
    if not content:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Photo body is empty.",
        )
    content_type = _image_content_type(request, content)
    snapshot = await pipeline.select_file(
        SelectedFile(content=content, filename=filename, content_type=content_type)
    )
    return upload_payload(snapshot)


@router.post("/{session_id}/camera/start")
async def start_camera(
    pipeline: UploadPipeline = Depends(get_pipeline),
) -> dict[str, object]:
    return upload_payload(await pipeline.start_camera())


@router.post("/{session_id}/camera/switch")
async def switch_camera(
    pipeline: UploadPipeline = Depends(get_pipeline),
) -> dict[str, object]:
    return upload_payload(await pipeline.switch_camera())


@router.post("/{session_id}/camera/capture")
async def capture_photo(
    pipeline: UploadPipeline = Depends(get_pipeline),
) -> dict[str, object]:
    return upload_payload(await pipeline.capture_photo())


@router.post("/{session_id}/camera/stop")
async def stop_camera(
    pipeline: UploadPipeline = Depends(get_pipeline),
) -> dict[str, object]:
    return upload_payload(pipeline.stop_camera())


@router.post("/{session_id}/caption")
async def generate_caption(
    pipeline: UploadPipeline = Depends(get_pipeline),
) -> dict[str, object]:
    return upload_payload(await pipeline.generate_caption())


@router.put("/{session_id}/note")
async def update_note(
    body: NoteRequest,
    pipeline: UploadPipeline = Depends(get_pipeline),
) -> dict[str, object]:
    return upload_payload(pipeline.update_note(body.note))


@router.post("/{session_id}/submit")
async def submit(
    pipeline: UploadPipeline = Depends(get_pipeline),
) -> dict[str, object]:
    """Upload the previewed photo to the album."""
    return upload_payload(await pipeline.submit())


@router.post("/{session_id}/reset")
async def reset(
    pipeline: UploadPipeline = Depends(get_pipeline),
) -> dict[str, object]:
    return upload_payload(pipeline.reset())

"""Response payload builders."""

from dataclasses import asdict

from wedding_share.domain.colors import ColorCheckResult
from wedding_share.domain.models import Photo, Theme, WeddingEvent
from wedding_share.domain.uploads import GuestUpload


def theme_payload(theme: Theme) -> dict[str, object]:
    return {
        "style": theme.style.value,
        "style_class": theme.style_class,
        "colors": list(theme.colors),
    }


def event_payload(event: WeddingEvent | None) -> dict[str, object] | None:
    if event is None:
        return None
    return {
        "couple_names": event.couple_names,
        "event_date": event.event_date,
        "theme": theme_payload(event.theme),
        "cover_photo_url": event.cover_photo_url,
        "qr_code_url": event.qr_code_url,
    }


def photo_payload(photo: Photo) -> dict[str, str]:
    return {"image_url": photo.image_url, "note": photo.note}


def color_results_payload(results: list[ColorCheckResult]) -> list[dict[str, object]]:
    return [asdict(result) for result in results]


def upload_payload(upload: GuestUpload) -> dict[str, object]:
    """Guest-visible fields; file bytes are never echoed back."""
    return {
        "state": upload.state.value,
        "preview_url": upload.preview_url,
        "filename": upload.selected_file.filename if upload.selected_file else None,
        "blur_warning": upload.blur_warning,
        "sharpness": upload.sharpness,
        "caption": upload.caption,
        "note": upload.note,
        "is_generating_caption": upload.is_generating_caption,
        "camera_error": upload.camera_error,
        "facing": upload.facing.value,
    }

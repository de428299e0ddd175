"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from wedding_share.api.guests import router as guests_router
from wedding_share.api.schemas import (
    ColorCheckRequest,
    CoverPhotoRequest,
    EventCreateRequest,
    LoginRequest,
)
from wedding_share.api.serializers import (
    color_results_payload,
    event_payload,
    photo_payload,
    theme_payload,
)
from wedding_share.app_logging import configure_logging
from wedding_share.containers import AppContainer
from wedding_share.domain.errors import (
    InvalidTransitionError,
    QrCompositionError,
    ThemeColorsError,
    ValidationError,
)
from wedding_share.domain.models import Theme, ThemeStyle, WeddingEvent
from wedding_share.services.events import EventDraft

SLIDESHOW_VIEW = "slideshow"


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(guests_router)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        content: dict[str, object] = {"detail": str(exc)}
        if isinstance(exc, ThemeColorsError):
            content["colors"] = color_results_payload(exc.results)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=content
        )

    @app.exception_handler(InvalidTransitionError)
    async def transition_error_handler(
        request: Request, exc: InvalidTransitionError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
        )

    @app.exception_handler(QrCompositionError)
    async def qr_error_handler(
        request: Request, exc: QrCompositionError
    ) -> JSONResponse:
        logger.error("QR composition failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Failed to generate QR code."},
        )

    def _require_event(request: Request) -> WeddingEvent:
        event = request.app.state.container.event_service.event
        if event is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="No event configured."
            )
        return event

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/")
    async def landing(request: Request, view: str | None = None) -> dict[str, object]:
        """Landing payload, or the read-only slideshow with ``?view=slideshow``."""
        state_container: AppContainer = request.app.state.container
        event = event_payload(state_container.event_service.event)
        if view == SLIDESHOW_VIEW:
            return {
                "view": SLIDESHOW_VIEW,
                "event": event,
                "photos": [photo_payload(p) for p in state_container.album.photos()],
            }
        return {
            "view": "landing",
            "event": event,
            "signed_in": state_container.auth_service.user is not None,
        }

    @app.post("/auth/login")
    async def login(body: LoginRequest, request: Request) -> dict[str, str]:
        user = request.app.state.container.auth_service.login(body.email)
        return {"name": user.name, "email": user.email}

    @app.post("/auth/logout")
    async def logout(request: Request) -> dict[str, str]:
        request.app.state.container.auth_service.logout()
        return {"status": "ok"}

    @app.get("/auth/me")
    async def me(request: Request) -> dict[str, object]:
        user = request.app.state.container.auth_service.user
        if user is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
        return {"name": user.name, "email": user.email}

    @app.get("/themes")
    async def themes() -> dict[str, object]:
        """Theme presets with their default colors."""
        return {"themes": [theme_payload(Theme.preset(style)) for style in ThemeStyle]}

    @app.post("/colors/check")
    async def check_colors(body: ColorCheckRequest, request: Request) -> dict[str, object]:
        """Validate color slots without creating an event."""
        results = request.app.state.container.color_validator.check(body.colors)
        return {"colors": color_results_payload(results)}

    @app.post("/events", status_code=status.HTTP_201_CREATED)
    async def create_event(body: EventCreateRequest, request: Request) -> dict[str, object]:
        """Validate the host form and render the personalized QR code."""
        state_container: AppContainer = request.app.state.container
        event = await state_container.event_service.create_event(
            EventDraft(
                couple_names=body.couple_names,
                event_date=body.event_date,
                style=body.style,
                colors=tuple(body.colors),
            )
        )
        artifact = state_container.event_service.artifact
        return {
            "event": event_payload(event),
            "qr": {
                "primary": artifact.primary,
                "secondary": artifact.secondary,
                "initials": artifact.initials,
                "font_size": artifact.font_size,
                "fallback_applied": artifact.fallback_applied,
            }
            if artifact
            else None,
        }

    @app.get("/events/current")
    async def current_event(request: Request) -> dict[str, object]:
        return {"event": event_payload(_require_event(request))}

    @app.delete("/events/current")
    async def clear_event(request: Request) -> dict[str, str]:
        request.app.state.container.event_service.clear_event()
        return {"status": "ok"}

    @app.get("/events/current/qr.png")
    async def event_qr(request: Request) -> Response:
        _require_event(request)
        artifact = request.app.state.container.event_service.artifact
        return Response(content=artifact.png_bytes, media_type="image/png")

    @app.put("/events/current/cover-photo")
    async def update_cover_photo(
        body: CoverPhotoRequest, request: Request
    ) -> dict[str, object]:
        _require_event(request)
        event = request.app.state.container.event_service.update_cover_photo(body.url)
        return {"event": event_payload(event)}

    @app.post("/events/current/print")
    async def print_qr(request: Request) -> dict[str, str]:
        """Send the QR code to the host's printer."""
        state_container: AppContainer = request.app.state.container
        _require_event(request)
        try:
            await state_container.print_surface.print_artifact(
                state_container.event_service.artifact.png_bytes
            )
        except Exception as exc:
            logger.exception("Failed to print QR code")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Printing failed.",
            ) from exc
        return {"status": "ok"}

    @app.post("/events/current/share")
    async def share_event(request: Request) -> dict[str, str]:
        state_container: AppContainer = request.app.state.container
        event = _require_event(request)
        outcome = await state_container.share_service.share_event(
            event, state_container.settings.public_base_url
        )
        return {"status": outcome.value}

    @app.get("/photos")
    async def list_photos(request: Request) -> dict[str, object]:
        photos = request.app.state.container.album.photos()
        return {"photos": [photo_payload(photo) for photo in photos]}

    @app.get("/photos/pdf")
    async def photos_pdf() -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            content={"detail": "PDF Album Generation is a premium feature coming soon!"},
        )

    return app

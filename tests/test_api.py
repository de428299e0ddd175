"""Tests for the HTTP API."""

from uuid import uuid4

from fastapi.testclient import TestClient

from wedding_share.api.app import create_app
from tests.conftest import make_png

EVENT = {
    "couple_names": "Alice and Bob",
    "event_date": "2026-06-20",
    "style": "Luxury",
    "colors": ["gold", "darkslategray"],
}


def _client(container) -> TestClient:  # type: ignore[no-untyped-def]
    return TestClient(create_app(container))


def test_health(container) -> None:
    response = _client(container).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_themes_lists_presets(container) -> None:
    themes = _client(container).get("/themes").json()["themes"]

    assert [theme["style"] for theme in themes] == ["Modern", "Retro", "Luxury"]
    assert themes[0]["colors"] == ["#4169E1", "#708090"]
    assert themes[2]["style_class"] == "theme-luxury"


def test_color_check_reports_slots(container) -> None:
    response = _client(container).post(
        "/colors/check", json={"colors": ["royalblue", "bogus"]}
    )

    assert response.status_code == 200
    colors = response.json()["colors"]
    assert colors[0]["hex"] == "#4169E1"
    assert colors[1]["valid"] is False


def test_create_event_returns_theme_and_qr(container) -> None:
    client = _client(container)

    response = client.post("/events", json=EVENT)

    assert response.status_code == 201
    data = response.json()
    assert data["event"]["theme"]["colors"] == ["#FFD700", "#2F4F4F"]
    assert data["event"]["qr_code_url"].startswith("data:image/png;base64,")
    assert data["qr"]["initials"] == "A & B"
    assert client.get("/events/current").json()["event"]["couple_names"] == "Alice and Bob"


def test_create_event_low_contrast_falls_back(container) -> None:
    response = _client(container).post(
        "/events",
        json={
            "couple_names": "Sam and Lee",
            "event_date": "2026-06-20",
            "colors": ["#FFFFFF", "#FFFFF0"],
        },
    )

    assert response.status_code == 201
    qr = response.json()["qr"]
    assert qr["fallback_applied"] is True
    assert (qr["primary"], qr["secondary"]) == ("#000000", "#FFFFFF")


def test_create_event_rejects_invalid_color(container) -> None:
    response = _client(container).post(
        "/events", json={**EVENT, "colors": ["gold", "not-a-color"]}
    )

    assert response.status_code == 422
    data = response.json()
    assert data["colors"][1]["error"] == "'not-a-color' is not a valid color."
    assert container.event_service.event is None


def test_create_event_requires_names(container) -> None:
    response = _client(container).post("/events", json={**EVENT, "couple_names": " "})

    assert response.status_code == 422
    assert response.json()["detail"] == "Please fill in couple names."


def test_current_event_missing_returns_404(container) -> None:
    client = _client(container)

    assert client.get("/events/current").status_code == 404
    assert client.get("/events/current/qr.png").status_code == 404
    assert client.post("/events/current/print").status_code == 404


def test_qr_png_and_cover_photo(container) -> None:
    client = _client(container)
    client.post("/events", json=EVENT)

    png = client.get("/events/current/qr.png")
    cover = client.put(
        "/events/current/cover-photo", json={"url": "https://img.example.com/c.jpg"}
    )

    assert png.status_code == 200
    assert png.headers["content-type"] == "image/png"
    assert png.content.startswith(b"\x89PNG")
    assert cover.json()["event"]["cover_photo_url"] == "https://img.example.com/c.jpg"


def test_print_and_share(container) -> None:
    client = _client(container)
    client.post("/events", json=EVENT)

    printed = client.post("/events/current/print")
    shared = client.post("/events/current/share")

    assert printed.json() == {"status": "ok"}
    artifact = container.event_service.artifact
    assert container.print_surface.printed == [artifact.png_bytes]
    assert shared.json() == {"status": "unsupported"}


def test_clear_event(container) -> None:
    client = _client(container)
    client.post("/events", json=EVENT)

    client.delete("/events/current")

    assert client.get("/events/current").status_code == 404


def test_auth_login_logout(container) -> None:
    client = _client(container)

    assert client.get("/auth/me").status_code == 401
    login = client.post("/auth/login", json={"email": "host@example.com"})
    assert login.json() == {"name": "Wedding Host", "email": "host@example.com"}
    assert client.get("/").json()["signed_in"] is True
    client.post("/auth/logout")
    assert client.get("/auth/me").status_code == 401


def test_guest_upload_flow_reaches_slideshow(container) -> None:
    client = _client(container)
    client.post("/events", json=EVENT)

    created = client.post("/guest/sessions")
    assert created.status_code == 201
    session_id = created.json()["session_id"]
    assert created.json()["caption_available"] is True
    assert created.json()["upload"]["state"] == "idle"

    selected = client.post(
        f"/guest/sessions/{session_id}/file",
        params={"filename": "cake.png"},
        content=make_png(sharp=True),
        headers={"content-type": "image/png"},
    ).json()
    assert selected["state"] == "preview"
    assert selected["filename"] == "cake.png"
    assert selected["blur_warning"] is False

    captioned = client.post(f"/guest/sessions/{session_id}/caption").json()
    assert captioned["caption"] == "Love, laughter and happily ever after!"

    client.put(f"/guest/sessions/{session_id}/note", json={"note": "Congrats!"})
    submitted = client.post(f"/guest/sessions/{session_id}/submit").json()
    assert submitted["state"] == "success"
    assert submitted["preview_url"] is None

    slideshow = client.get("/", params={"view": "slideshow"}).json()
    assert slideshow["view"] == "slideshow"
    assert slideshow["photos"][0]["note"] == "Congrats!"
    assert slideshow["photos"][0]["image_url"].startswith("data:image/png;base64,")

    again = client.post(f"/guest/sessions/{session_id}/reset").json()
    assert again["state"] == "idle"


def test_guest_blurry_photo_warns(container, sharpness_probe) -> None:
    sharpness_probe.value = 12.0
    client = _client(container)
    session_id = client.post("/guest/sessions").json()["session_id"]

    selected = client.post(
        f"/guest/sessions/{session_id}/file",
        content=make_png(sharp=False),
        headers={"content-type": "image/png"},
    ).json()

    assert selected["state"] == "preview"
    assert selected["blur_warning"] is True


def test_guest_camera_capture(container) -> None:
    client = _client(container)
    session_id = client.post("/guest/sessions").json()["session_id"]

    started = client.post(f"/guest/sessions/{session_id}/camera/start").json()
    switched = client.post(f"/guest/sessions/{session_id}/camera/switch").json()
    captured = client.post(f"/guest/sessions/{session_id}/camera/capture").json()

    assert started["state"] == "capturing"
    assert switched["facing"] == "user"
    assert captured["state"] == "preview"
    assert captured["filename"] == "capture.jpg"


def test_guest_invalid_transition_is_conflict(container) -> None:
    client = _client(container)
    session_id = client.post("/guest/sessions").json()["session_id"]

    response = client.post(f"/guest/sessions/{session_id}/submit")

    assert response.status_code == 409
    assert response.json()["detail"] == "Cannot upload while idle."


def test_guest_empty_body_rejected(container) -> None:
    client = _client(container)
    session_id = client.post("/guest/sessions").json()["session_id"]

    response = client.post(f"/guest/sessions/{session_id}/file", content=b"")

    assert response.status_code == 422


def test_guest_file_rejects_non_image_type(container) -> None:
    client = _client(container)
    session_id = client.post("/guest/sessions").json()["session_id"]

    response = client.post(
        f"/guest/sessions/{session_id}/file",
        content=b"<script>alert(1)</script>",
        headers={"content-type": "text/html"},
    )

    assert response.status_code == 415
    assert client.get(f"/guest/sessions/{session_id}").json()["state"] == "idle"


def test_guest_file_content_type_is_normalized(container, album) -> None:
    client = _client(container)
    session_id = client.post("/guest/sessions").json()["session_id"]

    client.post(
        f"/guest/sessions/{session_id}/file",
        content=make_png(),
        headers={"content-type": "Image/PNG; charset=binary"},
    )
    client.post(f"/guest/sessions/{session_id}/submit")

    assert album.photos()[0].image_url.startswith("data:image/png;base64,")


def test_guest_unknown_session_is_404(container) -> None:
    client = _client(container)

    assert client.get(f"/guest/sessions/{uuid4()}").status_code == 404


def test_guest_session_close(container) -> None:
    client = _client(container)
    session_id = client.post("/guest/sessions").json()["session_id"]

    assert client.delete(f"/guest/sessions/{session_id}").status_code == 204
    assert client.get(f"/guest/sessions/{session_id}").status_code == 404


def test_photos_pdf_is_premium(container) -> None:
    response = _client(container).get("/photos/pdf")

    assert response.status_code == 402
    assert "premium" in response.json()["detail"]

"""Tests for external adapters."""

import asyncio

import pytest

from wedding_share.adapters.openai_caption_client import OpenAICaptionClient
from wedding_share.adapters.system_print_surface import SystemPrintSurface


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str = "Cheers to forever!") -> None:
        self.responses = _FakeResponses(output_text)


def test_openai_caption_client_returns_output_text() -> None:
    fake = _FakeOpenAI()
    client = OpenAICaptionClient(client=fake)

    result = asyncio.run(
        client.caption(
            model="gpt-4.1-mini",
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
            prompt="Caption this",
        )
    )

    assert result == "Cheers to forever!"
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-4.1-mini"
    assert payload["store"] is False
    content = payload["input"][0]["content"]
    assert content[0] == {"type": "input_text", "text": "Caption this"}
    assert content[1]["image_url"] == "data:image/jpeg;base64,ZmFrZQ=="


def test_openai_caption_client_rejects_empty_output() -> None:
    client = OpenAICaptionClient(client=_FakeOpenAI(output_text=""))

    with pytest.raises(RuntimeError):
        asyncio.run(
            client.caption(model="m", image_data_url="data:,", prompt="p")
        )


def test_system_print_surface_runs_command() -> None:
    surface = SystemPrintSurface(command="true")

    asyncio.run(surface.print_artifact(b"\x89PNG\r\n\x1a\n"))


def test_system_print_surface_reports_failure() -> None:
    surface = SystemPrintSurface(command="false")

    with pytest.raises(RuntimeError):
        asyncio.run(surface.print_artifact(b"\x89PNG\r\n\x1a\n"))

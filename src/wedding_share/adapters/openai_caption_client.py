"""OpenAI Responses API client for photo captions."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from wedding_share.services.captions import CaptionClient


@dataclass
class OpenAICaptionClient(CaptionClient):
    """Caption client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAICaptionClient":
        """Create an OpenAI caption client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def caption(self, *, model: str, image_data_url: str, prompt: str) -> str:
        """Call OpenAI Responses API with the image and prompt."""
        response = await self.client.responses.create(
            model=model,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": image_data_url},
                    ],
                }
            ],
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()

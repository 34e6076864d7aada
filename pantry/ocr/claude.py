"""Claude API engine for receipt transcription."""

from __future__ import annotations

import base64

from . import OCREngine

_PROMPT = """\
This image is a photo of a shopping receipt.
Transcribe the printed text exactly as it appears, one receipt line per
output line, top to bottom. Keep quantities, units and prices as printed.
Do not summarize, translate, correct or add anything; output only the text.
"""


def _media_type(data: bytes) -> str:
    if data.startswith(b"\x89PNG"):
        return "image/png"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    return "image/jpeg"


class ClaudeEngine(OCREngine):
    """Transcribe receipts using Claude's vision capability."""

    name = "claude"

    def __init__(
        self, api_key: str = "", model: str = "claude-sonnet-4-5-20250929"
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._client = None

    def _get_client(self):
        if not self._api_key:
            raise ValueError(
                "Anthropic API key is not set. "
                "Check the config file or the ANTHROPIC_API_KEY environment variable."
            )

        if self._client is None:
            try:
                import anthropic
            except ImportError:
                raise ImportError(
                    "anthropic SDK is required: pip install 'pantry-tracker[claude]'"
                ) from None
            self._client = anthropic.AsyncAnthropic(api_key=self._api_key)
        return self._client

    async def recognize(self, image: bytes) -> str:
        client = self._get_client()
        content = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": _media_type(image),
                    "data": base64.standard_b64encode(image).decode(),
                },
            },
            {"type": "text", "text": _PROMPT},
        ]

        response = await client.messages.create(
            model=self._model,
            max_tokens=4096,
            messages=[{"role": "user", "content": content}],
        )
        return _strip_fences(response.content[0].text)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None


def _strip_fences(text: str) -> str:
    """Remove markdown code fences the model sometimes wraps output in."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned

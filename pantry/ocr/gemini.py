"""Gemini API engine for receipt transcription."""

from __future__ import annotations

from . import OCREngine
from .claude import _PROMPT, _media_type, _strip_fences


class GeminiEngine(OCREngine):
    """Transcribe receipts using Google Gemini's vision capability."""

    name = "gemini"

    def __init__(self, api_key: str = "", model: str = "gemini-2.0-flash") -> None:
        self._api_key = api_key
        self._model = model

    async def recognize(self, image: bytes) -> str:
        if not self._api_key:
            raise ValueError(
                "Gemini API key is not set. "
                "Check the config file or the GEMINI_API_KEY environment variable."
            )

        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai SDK is required: pip install 'pantry-tracker[gemini]'"
            ) from None

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(self._model)

        parts = [{"mime_type": _media_type(image), "data": image}, _PROMPT]
        response = await model.generate_content_async(parts)
        return _strip_fences(response.text)

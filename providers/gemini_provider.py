"""
Google Gemini vision provider — uses the google-genai SDK.

All images go in as inline byte parts followed by the instruction text.
Gemini reports blocked / empty generations as a response with no text rather
than an HTTP error; those are surfaced as malformed_body.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

import aiohttp
import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

import config
from listing import ImageInput
from providers.base import (
    ErrorKind, ProviderError, VisionProvider, error_for_status,
)

logger = logging.getLogger(__name__)

_SAFETY_OFF = [
    genai_types.SafetySetting(category="HARM_CATEGORY_HARASSMENT",        threshold="OFF"),
    genai_types.SafetySetting(category="HARM_CATEGORY_HATE_SPEECH",       threshold="OFF"),
    genai_types.SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="OFF"),
    genai_types.SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="OFF"),
]


class GeminiProvider(VisionProvider):

    name = "google"

    def __init__(self, api_key: Optional[str], model: str = "gemini-1.5-flash", timeout: float = 60.0):
        super().__init__(api_key, model, timeout)
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(
                api_key=self.api_key,
                # HttpOptions.timeout is in milliseconds
                http_options=genai_types.HttpOptions(timeout=int(self.timeout * 1000)),
            )
        return self._client

    async def _request(self, images: Sequence[ImageInput], instruction: str) -> str:
        contents = [
            genai_types.Part.from_bytes(data=img.raw_bytes(), mime_type=img.mime_type)
            for img in images
        ]
        contents.append(instruction)

        gen_config = genai_types.GenerateContentConfig(
            temperature=0,
            max_output_tokens=config.MAX_OUTPUT_TOKENS,
            safety_settings=_SAFETY_OFF,
        )

        response = await self._get_client().aio.models.generate_content(
            model=self.model_id,
            contents=contents,
            config=gen_config,
        )

        raw = response.text
        if not raw:
            feedback = getattr(response, "prompt_feedback", None)
            reason = getattr(feedback, "block_reason", None)
            raise ProviderError(
                ErrorKind.MALFORMED_BODY,
                f"No text in response (block_reason={reason})",
                self.full_name,
            )
        return raw

    def _translate_error(self, exc: Exception) -> Optional[ProviderError]:
        if isinstance(exc, genai_errors.APIError):
            return error_for_status(exc.code, exc.message or str(exc), self.full_name)
        if isinstance(exc, (httpx.TransportError, aiohttp.ClientConnectionError, asyncio.TimeoutError)):
            return ProviderError(ErrorKind.NETWORK, str(exc) or type(exc).__name__, self.full_name)
        return None

"""
OpenAI implementation of ContentGenerator.

Uses chat completions for text and a base64 data URL for images.
Transient failures (rate limits, connection drops, timeouts) are retried
with exponential backoff; anything still failing is raised for the
CoachService to turn into fallback text.
"""
import base64
import logging
from typing import Optional

import httpx
from openai import APIConnectionError, APITimeoutError, OpenAI, RateLimitError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT = 30.0
MAX_ATTEMPTS = 3

_retry_transient = retry(
    retry=retry_if_exception_type((RateLimitError, APIConnectionError, APITimeoutError)),
    stop=stop_after_attempt(MAX_ATTEMPTS),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


class OpenAIContentGenerator:
    """ContentGenerator backed by the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        vision_model: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[OpenAI] = None,
    ):
        if not api_key and client is None:
            raise ValueError("OpenAI API key not configured. Set OPENAI_API_KEY environment variable.")
        self._model = model
        self._vision_model = vision_model or model
        self._client = client or OpenAI(
            api_key=api_key,
            timeout=timeout,
            http_client=httpx.Client(timeout=timeout),
        )

    @_retry_transient
    def generate(self, prompt: str, *, temperature: float = 0.7) -> str:
        response = self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
        )
        return response.choices[0].message.content or ""

    @_retry_transient
    def analyze_image(self, image_bytes: bytes, mime_type: str, prompt: str) -> str:
        encoded = base64.b64encode(image_bytes).decode("ascii")
        response = self._client.chat.completions.create(
            model=self._vision_model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {
                            "type": "image_url",
                            "image_url": {"url": f"data:{mime_type};base64,{encoded}"},
                        },
                    ],
                }
            ],
        )
        return response.choices[0].message.content or ""

"""
Content Generator Interface (Port).

A text-generation model used for coaching copy, meal plans, chat and
equipment recognition. Any failure may surface as an exception; the
CoachService turns every failure into fallback text.
"""
from typing import Protocol


class ContentGenerator(Protocol):
    """Abstract interface for a generative text model."""

    def generate(self, prompt: str, *, temperature: float = 0.7) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: Full prompt text, including any conversation history
            temperature: Sampling temperature

        Returns:
            Generated text (may be empty)
        """
        ...

    def analyze_image(self, image_bytes: bytes, mime_type: str, prompt: str) -> str:
        """Answer `prompt` about an image."""
        ...

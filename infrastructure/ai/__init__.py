"""Generative model adapters."""

from infrastructure.ai.openai_content_generator import OpenAIContentGenerator

__all__ = ["OpenAIContentGenerator"]

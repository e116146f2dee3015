# Infrastructure LLM Adapters Package
from .http_llm import GeminiLlmService, OpenAiLlmService

__all__ = ["GeminiLlmService", "OpenAiLlmService"]

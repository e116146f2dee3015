"""
Collaborator Factory
Centralizes the construction of the repository, scheduler and LLM from config.
"""

from keikaku.application.config import AppConfig
from keikaku.domain.errors import InvalidValues
from keikaku.domain.ports import LlmService, SrsService, UserRepository
from keikaku.infrastructure.llm import GeminiLlmService, OpenAiLlmService
from keikaku.infrastructure.llm.http_llm import (
    GEMINI_BASE_URL,
    GEMINI_DEFAULT_MODEL,
    OPENAI_BASE_URL,
    OPENAI_DEFAULT_MODEL,
)
from keikaku.infrastructure.persistence import FileUserRepository
from keikaku.infrastructure.srs import FsrsSrsService


def get_user_repository(config: AppConfig) -> UserRepository:
    """
    Returns the file-backed repository rooted at config.data_dir.
    """
    return FileUserRepository(config.data_dir)


def get_srs_service(config: AppConfig) -> SrsService:
    """
    Returns the FSRS scheduler configured from config.
    """
    return FsrsSrsService(
        desired_retention=config.desired_retention,
        maximum_interval=config.maximum_interval,
        enable_fuzzing=config.enable_fuzzing,
    )


def get_llm_service(config: AppConfig) -> LlmService:
    """
    Returns the LLM adapter selected by config.llm_provider.

    Raises InvalidValues when no provider is configured, or when a hosted
    provider has no API key. An OpenAI-compatible server given through
    llm_base_url may run without a key.
    """
    if config.llm_provider == "none":
        raise InvalidValues(
            "LLM is not configured: set llm_provider and llm_api_key "
            "(KEIKAKU_LLM_PROVIDER, KEIKAKU_LLM_API_KEY)"
        )

    api_key = config.llm_api_key.get_secret_value() if config.llm_api_key else ""

    if config.llm_provider == "openai":
        if not api_key and not config.llm_base_url:
            raise InvalidValues("llm_api_key is required for the openai provider")
        return OpenAiLlmService(
            api_key=api_key,
            model=config.llm_model or OPENAI_DEFAULT_MODEL,
            base_url=config.llm_base_url or OPENAI_BASE_URL,
        )

    if not api_key:
        raise InvalidValues("llm_api_key is required for the gemini provider")
    return GeminiLlmService(
        api_key=api_key,
        model=config.llm_model or GEMINI_DEFAULT_MODEL,
        base_url=config.llm_base_url or GEMINI_BASE_URL,
    )

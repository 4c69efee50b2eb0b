import structlog
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from ..config import settings

logger = structlog.get_logger(__name__)


def _build_openai(*, temperature: float, max_tokens: int, json_mode: bool) -> Runnable:
    api_key = settings.openai_api_key
    if not api_key:
        raise ValueError("OPENAI_API_KEY environment variable must be set")

    llm = ChatOpenAI(
        model=settings.llm_model,
        temperature=temperature,
        max_tokens=max_tokens,
        api_key=api_key,
    )
    if json_mode:
        return llm.bind(response_format={"type": "json_object"})
    return llm


def _build_gemini(*, temperature: float, max_tokens: int, json_mode: bool) -> BaseChatModel:
    api_key = settings.google_api_key
    if not api_key:
        raise ValueError("GOOGLE_API_KEY (or GEMINI_API_KEY) environment variable must be set")

    extra = {"response_mime_type": "application/json"} if json_mode else {}
    return ChatGoogleGenerativeAI(
        model=settings.llm_model,
        temperature=temperature,
        max_output_tokens=max_tokens,
        google_api_key=api_key,
        **extra,
    )


def get_chat_llm(*, temperature: float | None = None, max_tokens: int = 2000, json_mode: bool = False) -> Runnable:
    provider = settings.llm_provider
    if temperature is None:
        temperature = settings.llm_temperature
    logger.debug("chat_llm_selected", provider=provider, model=settings.llm_model, json_mode=json_mode)
    if provider == "openai":
        return _build_openai(temperature=temperature, max_tokens=max_tokens, json_mode=json_mode)
    if provider == "gemini":
        return _build_gemini(temperature=temperature, max_tokens=max_tokens, json_mode=json_mode)
    raise RuntimeError(f"Unsupported LLM provider: {provider}")

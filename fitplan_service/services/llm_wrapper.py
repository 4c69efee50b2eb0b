from typing import Any

import structlog
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from ..exceptions import ModelInvocationError
from ..metrics import MODEL_CALLS_TOTAL
from ..prompts import PromptSpec
from .langchain_runtime import get_chat_llm

logger = structlog.get_logger(__name__)

_MESSAGE_TYPES = {
    "system": SystemMessage,
    "user": HumanMessage,
    "assistant": AIMessage,
}


def to_langchain_messages(messages: list[dict[str, Any]]) -> list[BaseMessage]:
    converted: list[BaseMessage] = []
    for message in messages:
        role = message.get("role", "user")
        message_cls = _MESSAGE_TYPES.get(role)
        if message_cls is None:
            raise ValueError(f"Unsupported message role: {role}")
        converted.append(message_cls(content=message.get("content", "")))
    return converted


def _content_text(content: Any) -> str:
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return str(content)


async def complete(spec: PromptSpec) -> str:
    """Run one chat completion and return the raw text of the reply."""
    MODEL_CALLS_TOTAL.labels(stage=spec.stage).inc()
    try:
        llm = get_chat_llm(max_tokens=spec.max_tokens, json_mode=spec.json_mode)
        response = await llm.ainvoke(to_langchain_messages(spec.messages))
    except Exception as exc:
        logger.error("model_call_failed", stage=spec.stage, error=str(exc), error_type=type(exc).__name__)
        raise ModelInvocationError(f"Model call failed for stage {spec.stage}", stage=spec.stage) from exc

    text = _content_text(getattr(response, "content", None))
    logger.info("model_call_completed", stage=spec.stage, chars=len(text))
    return text

"""Generative backend boundary.

complete() never raises: every failure (missing model, timeout, provider
error, empty output) comes back as a failed Completion for the caller to
branch on.
"""

import asyncio
import logging
from dataclasses import dataclass

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "generative backend not configured"


@dataclass(frozen=True)
class Completion:
    """Result of one generative call: either text or an error description."""

    text: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text)


def _content_text(content) -> str:
    """Flatten LangChain message content (str or list of content blocks) to text."""
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts).strip()
    return ""


async def complete(
    llm: BaseChatModel | None,
    messages: list[BaseMessage],
    timeout: float = 60.0,
) -> Completion:
    """Invoke the chat model and wrap the outcome in a Completion."""
    if llm is None:
        return Completion(error=NOT_CONFIGURED)

    try:
        response = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Generative backend timed out after %ss", timeout)
        return Completion(error=f"generative backend timed out after {timeout}s")
    except Exception as e:
        logger.warning("Generative backend failed: %s: %s", type(e).__name__, e)
        return Completion(error=f"{type(e).__name__}: {e}")

    text = _content_text(getattr(response, "content", None))
    if not text:
        logger.warning("Generative backend returned no text content")
        return Completion(error="generative backend returned an empty or malformed response")
    return Completion(text=text)

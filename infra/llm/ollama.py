from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Optional

from langchain_ollama import OllamaLLM as LangChainOllamaLLM

from agents.core.llm import LLM, BackendError, RateLimitedError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300.0


def _status_code(exc: BaseException) -> Optional[int]:
    """HTTP status carried by ollama.ResponseError or httpx.HTTPStatusError, if any."""
    code = getattr(exc, "status_code", None)
    if code is None:
        response = getattr(exc, "response", None)
        code = getattr(response, "status_code", None)
    return code if isinstance(code, int) else None


def _retry_after(exc: BaseException) -> Optional[float]:
    response = getattr(exc, "response", None)
    headers = getattr(response, "headers", None) or {}
    try:
        value = headers.get("retry-after")
        return float(value) if value is not None else None
    except (TypeError, ValueError, AttributeError):
        return None


class OllamaLLM(LLM):
    def __init__(
        self,
        model: str,
        temperature: float = 0.7,
        base_url: str = "http://localhost:11434",
        timeout: float = DEFAULT_TIMEOUT,
        **kwargs: Any,
    ):
        # Avoid infinite recursion: this wrapper is `OllamaLLM`, the LangChain class is aliased.
        self._llm = LangChainOllamaLLM(model=model, temperature=temperature, base_url=base_url, **kwargs)
        self.model = model
        self.timeout = timeout

    async def agenerate(self, prompt: str) -> str:
        start_time = time.time()
        input_tokens = len(prompt) // 4  # Rough estimate
        logger.debug("LLM call starting: ~%s input tokens", input_tokens)

        try:
            result = await asyncio.wait_for(self._llm.ainvoke(prompt), timeout=self.timeout)
        except asyncio.TimeoutError:
            elapsed = time.time() - start_time
            logger.error("LLM call timed out after %.2fs (timeout: %ss)", elapsed, self.timeout)
            raise BackendError(f"LLM call timed out after {self.timeout}s") from None
        except Exception as e:
            elapsed = time.time() - start_time
            if _status_code(e) == 429:
                logger.warning("LLM call rate limited after %.2fs", elapsed)
                raise RateLimitedError(str(e), retry_after=_retry_after(e)) from e
            logger.error("LLM call failed after %.2fs: %s", elapsed, e)
            raise BackendError(str(e)) from e

        elapsed = time.time() - start_time
        text = result if isinstance(result, str) else str(getattr(result, "content", result))
        logger.info("LLM call completed in %.2fs (~%s in, ~%s out)", elapsed, input_tokens, len(text) // 4)
        if elapsed > 60:
            logger.warning("LLM call took %.2fs - consider a faster model than %s", elapsed, self.model)
        return text

from abc import ABC, abstractmethod
from typing import Optional


class RateLimitedError(Exception):
    """Raised by an LLM backend when the provider signals rate limiting (HTTP 429)."""

    def __init__(self, message: str = "rate limited", *, retry_after: Optional[float] = None):
        super().__init__(message)
        self.retry_after = retry_after


class BackendError(Exception):
    """Any non rate-limit failure of the generative backend (credentials, network, non-2xx)."""


class LLM(ABC):
    """
    Defines the contract for all LLMs.
    Backends translate provider errors into RateLimitedError / BackendError.
    """
    @abstractmethod
    async def agenerate(self, prompt: str) -> str:
        raise NotImplementedError

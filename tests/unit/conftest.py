"""
Unit test fixtures. Use fakes; no real LLM, no network.
"""
import pytest

from agents.core.llm import LLM
from agents.core.rate_limiter import SlidingWindowRateLimiter


class FakeClock:
    """Manual clock; `sleep` advances it instead of waiting."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedLLM(LLM):
    """Returns (or raises) the scripted items in order and records every prompt."""

    def __init__(self, *items):
        self.items = list(items)
        self.prompts: list[str] = []

    async def agenerate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        item = self.items.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class RecordingSink:
    def __init__(self):
        self.initial: list[str] = []
        self.errors: list[tuple[str, str, str, BaseException]] = []

    def save_initial_response(self, text: str) -> None:
        self.initial.append(text)

    def save_error(self, step: str, prompt: str, response: str, error: BaseException) -> None:
        self.errors.append((step, prompt, response, error))


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(fake_clock) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(max_calls=15, window_seconds=60.0, clock=fake_clock, sleep=fake_clock.sleep)


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def scripted_llm():
    """Factory: scripted_llm("response 1", RateLimitedError(), ...)."""
    return ScriptedLLM

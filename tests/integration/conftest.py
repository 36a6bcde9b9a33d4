"""
Integration test fixtures. Overrides settings and the generation service so API
tests use temporary directories and a scripted backend instead of Ollama.
"""
import pytest

from agents.core.llm import LLM
from agents.core.rate_limiter import SlidingWindowRateLimiter
from agents.course_agent.agent import CourseAgentPipeline
from agents.course_agent.reconciler import CourseReconciler


class ScriptedBackend(LLM):
    def __init__(self):
        self.responses: list = []
        self.prompts: list[str] = []

    async def agenerate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


async def _no_sleep(_seconds: float) -> None:
    return None


@pytest.fixture
def test_settings(tmp_path):
    from api.config import Settings
    return Settings(
        data_dir=tmp_path / "users",
        generated_dir=tmp_path / "generated_courses",
        diagnostics_dir=tmp_path / "error_logs",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def backend() -> ScriptedBackend:
    """Queue responses with `backend.responses.append(...)`."""
    return ScriptedBackend()


@pytest.fixture
def api_client(test_settings, backend):
    """FastAPI TestClient with temp storage and a scripted generative backend."""
    from fastapi.testclient import TestClient
    from api.api import app
    from api.config import get_settings
    from api.routes.course_routes import get_agent_service, get_generation_service
    from api.services.course_generation_service import CourseGenerationService
    from api.utils.diagnostics import FileDiagnosticSink

    def _service():
        reconciler = CourseReconciler(
            llm=backend,
            limiter=SlidingWindowRateLimiter(sleep=_no_sleep),
            sink=FileDiagnosticSink(test_settings.diagnostics_dir),
        )
        return CourseGenerationService(reconciler, generated_dir=test_settings.generated_dir)

    def _agent_service():
        agent = CourseAgentPipeline(
            llm=backend,
            limiter=SlidingWindowRateLimiter(sleep=_no_sleep),
            sink=FileDiagnosticSink(test_settings.diagnostics_dir),
        )
        return CourseGenerationService(
            agent, generated_dir=test_settings.generated_dir, operation="create_course_agent"
        )

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_generation_service] = _service
    app.dependency_overrides[get_agent_service] = _agent_service
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()

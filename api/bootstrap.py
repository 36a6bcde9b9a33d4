from agents.core.rate_limiter import SlidingWindowRateLimiter
from agents.course_agent.agent import CourseAgentPipeline
from agents.course_agent.generation import GenerationConfig
from agents.course_agent.reconciler import CourseReconciler

from api.config import Settings
from api.utils.diagnostics import FileDiagnosticSink
from infra.llm.ollama import OllamaLLM


def build_rate_limiter(settings: Settings) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(max_calls=settings.max_requests_per_minute, window_seconds=60.0)


def build_generation_config(settings: Settings) -> GenerationConfig:
    return GenerationConfig(
        token_limit=settings.token_limit,
        max_chunk_tokens=settings.max_chunk_tokens,
        model_context_tokens=settings.model_context_tokens,
        prompt_reserve_tokens=settings.prompt_reserve_tokens,
        max_retries=settings.max_retries,
        initial_backoff_seconds=settings.initial_backoff_seconds,
        chunk_delay_seconds=settings.chunk_delay_seconds,
        max_modules=settings.max_modules,
        verify_json=settings.verify_json,
        fact_check=settings.fact_check,
    )


def _build_llm(settings: Settings) -> OllamaLLM:
    return OllamaLLM(
        model=settings.ollama_model,
        temperature=settings.temperature,
        base_url=settings.ollama_base_url,
        timeout=settings.llm_timeout_seconds,
    )


def build_reconciler(settings: Settings, limiter: SlidingWindowRateLimiter) -> CourseReconciler:
    return CourseReconciler(
        llm=_build_llm(settings),
        limiter=limiter,
        config=build_generation_config(settings),
        sink=FileDiagnosticSink(settings.diagnostics_dir),
    )


def build_course_agent(settings: Settings, limiter: SlidingWindowRateLimiter) -> CourseAgentPipeline:
    return CourseAgentPipeline(
        llm=_build_llm(settings),
        limiter=limiter,
        config=build_generation_config(settings),
        sink=FileDiagnosticSink(settings.diagnostics_dir),
    )

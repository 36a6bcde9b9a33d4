"""
Course endpoints: generation from uploads, parse/normalize/serialize, per-user storage.
"""

from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse

from agents.core.rate_limiter import SlidingWindowRateLimiter
from agents.course_agent.normalizer import normalize_ai_course
from agents.course_agent.parser import parse_course_text
from agents.course_agent.serializer import serialize_course

from api.bootstrap import build_course_agent, build_rate_limiter, build_reconciler
from api.config import Settings, get_settings
from api.schemas.course_schemas import CourseResponse, ErrorResponse, SaveCourseResponse
from api.services.course_generation_service import CourseGenerationService
from api.services.course_store import CourseStore
from api.utils.logger import configure_logging

logger = configure_logging()

course_routes = APIRouter()


@lru_cache
def get_rate_limiter() -> SlidingWindowRateLimiter:
    """One limiter per process: every generation request shares the backend budget."""
    return build_rate_limiter(get_settings())


def get_generation_service(
    settings: Settings = Depends(get_settings),
    limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> CourseGenerationService:
    return CourseGenerationService(build_reconciler(settings, limiter), generated_dir=settings.generated_dir)


def get_agent_service(
    settings: Settings = Depends(get_settings),
    limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> CourseGenerationService:
    return CourseGenerationService(
        build_course_agent(settings, limiter),
        generated_dir=settings.generated_dir,
        operation="create_course_agent",
    )


def get_course_store(settings: Settings = Depends(get_settings)) -> CourseStore:
    return CourseStore(settings.data_dir)


async def _body_text(request: Request) -> str:
    raw = await request.body()
    return raw.decode("utf-8", errors="replace")


def _missing_file() -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="No PDF file uploaded.", code="missing_file").model_dump(),
    )


def _malformed(exc: Exception) -> JSONResponse:
    logger.warning("malformed course json: %r", exc)
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(error="Malformed course JSON.", code="malformed_course_json").model_dump(),
    )


@course_routes.post("/generate-course", response_class=PlainTextResponse)
async def generate_course(
    pdfFile: Optional[UploadFile] = File(None),
    service: CourseGenerationService = Depends(get_generation_service),
):
    """Generate canonical course text from an uploaded PDF or text document."""
    if pdfFile is None:
        return _missing_file()
    data = await pdfFile.read()
    markdown = await service.generate_from_upload(data, pdfFile.content_type)
    return PlainTextResponse(markdown)


@course_routes.post("/create-course-agent", response_class=PlainTextResponse)
async def create_course_agent(
    pdfFile: Optional[UploadFile] = File(None),
    service: CourseGenerationService = Depends(get_agent_service),
):
    """Generate course text chapter by chapter: outline first, then one module per chapter."""
    if pdfFile is None:
        return _missing_file()
    data = await pdfFile.read()
    markdown = await service.generate_from_upload(data, pdfFile.content_type)
    return PlainTextResponse(markdown)


@course_routes.post("/courses/parse", response_model=CourseResponse)
async def parse_course(request: Request) -> CourseResponse:
    """Parse canonical course text (request body) into structured JSON."""
    course = parse_course_text(await _body_text(request))
    return CourseResponse.from_course(course)


@course_routes.post("/courses/normalize", response_model=CourseResponse)
async def normalize_course(payload: Dict[str, Any] = Body(...)):
    """Reshape generator JSON into the structured course JSON."""
    try:
        course = normalize_ai_course(payload)
    except (KeyError, TypeError, AttributeError, IndexError) as e:
        return _malformed(e)
    return CourseResponse.from_course(course)


@course_routes.post("/courses/serialize", response_class=PlainTextResponse)
async def serialize_ai_course(payload: Dict[str, Any] = Body(...)):
    """Render generator JSON as canonical course text."""
    try:
        course = normalize_ai_course(payload)
    except (KeyError, TypeError, AttributeError, IndexError) as e:
        return _malformed(e)
    return PlainTextResponse(serialize_course(course))


@course_routes.get("/courses/{user_id}", response_model=list[str])
async def list_courses(user_id: str, store: CourseStore = Depends(get_course_store)) -> list[str]:
    return store.list_courses(user_id)


@course_routes.get("/courses/{user_id}/{course_name}", response_class=PlainTextResponse)
async def get_course(user_id: str, course_name: str, store: CourseStore = Depends(get_course_store)):
    return PlainTextResponse(store.read_course(user_id, course_name))


@course_routes.post("/save-course/{user_id}", response_model=SaveCourseResponse)
async def save_course(
    user_id: str,
    request: Request,
    store: CourseStore = Depends(get_course_store),
) -> SaveCourseResponse:
    file_name = store.save_course(user_id, await _body_text(request))
    return SaveCourseResponse(message="Course saved successfully!", file_name=file_name)

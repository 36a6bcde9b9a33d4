from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from fastapi import Request
from starlette.responses import Response, JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException

from agents.course_agent.errors import CourseGenerationError
from api.routes.course_routes import course_routes
from api.services.course_store import CourseNotFoundError, InvalidNameError
from api.utils.logger import configure_logging, set_request_id, clear_request_id
from api.utils.text_extractor import UnsupportedDocumentTypeError

app = FastAPI()
logger = configure_logging()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, error: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "code": code})


@app.middleware("http")
async def request_logger(request: Request, call_next):
    rid = set_request_id(request.headers.get("x-request-id"))
    try:
        logger.info("request start method=%s path=%s client=%s", request.method, request.url.path, request.client)
        response: Response = await call_next(request)
        logger.info("request end status=%s method=%s path=%s", response.status_code, request.method, request.url.path)
        response.headers["x-request-id"] = rid
        return response
    except Exception:
        logger.exception("request error method=%s path=%s", request.method, request.url.path)
        raise
    finally:
        clear_request_id()


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    # Log server-side errors with stack traces; client errors as warnings.
    if exc.status_code >= 500:
        logger.exception("http error status=%s method=%s path=%s detail=\n%s", exc.status_code, request.method, request.url.path, exc.detail)
    else:
        logger.warning("http error status=%s method=%s path=%s detail=\n%s", exc.status_code, request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("validation error method=%s path=%s errors=\n%s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=422, content={"detail": exc.errors()})


@app.exception_handler(CourseGenerationError)
async def course_generation_exception_handler(request: Request, exc: CourseGenerationError) -> JSONResponse:
    # Partial or malformed model output never reaches the client.
    logger.error("course generation failed code=%s path=%s error=%s", exc.code, request.url.path, exc)
    return _error(HTTP_500_INTERNAL_SERVER_ERROR, "Failed to generate course.", exc.code)


@app.exception_handler(UnsupportedDocumentTypeError)
async def unsupported_document_handler(request: Request, exc: UnsupportedDocumentTypeError) -> JSONResponse:
    logger.warning("unsupported upload path=%s error=%s", request.url.path, exc)
    return _error(400, str(exc), "unsupported_document")


@app.exception_handler(InvalidNameError)
async def invalid_name_handler(request: Request, exc: InvalidNameError) -> JSONResponse:
    logger.warning("invalid name path=%s error=%s", request.url.path, exc)
    return _error(400, str(exc), "invalid_name")


@app.exception_handler(CourseNotFoundError)
async def course_not_found_handler(request: Request, exc: CourseNotFoundError) -> JSONResponse:
    return _error(404, "Course not found.", "course_not_found")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Never leak internal exception details to clients.
    logger.exception("unhandled error method=%s path=%s", request.method, request.url.path)
    return _error(HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred.", "internal_error")


@app.get("/")
def read_root():
    return {"message": "Course generator is Healthy"}

app.include_router(course_routes)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)

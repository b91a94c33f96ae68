import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import get_settings
from errors import StoryServiceError
from generator import StoryGenerator
from log_setup import configure_logging
from schemas import ErrorResponse, RandomPrompt, StoryRequest, StoryResult

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {500: {"model": ErrorResponse}}


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not get_settings().gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set - generation requests will fail")
    yield


app = FastAPI(title="Starlight Weaver relay", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


@app.exception_handler(StoryServiceError)
async def story_service_error_handler(request: Request, exc: StoryServiceError):
    logger.error(
        f"{request.url.path} failed: {exc.message}",
        extra={
            "endpoint": request.url.path,
            "status_code": exc.status_code,
            "error_type": type(exc).__name__,
        },
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"{request.url.path} failed unexpectedly: {exc}",
        extra={"endpoint": request.url.path, "status_code": 500, "error_type": type(exc).__name__},
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": f"Server error: {exc}"})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    )
    return JSONResponse(status_code=422, content={"error": f"Invalid request: {details}"})


def get_generator() -> StoryGenerator:
    return StoryGenerator(get_settings())


@app.post("/generate-story", response_model=StoryResult, responses=ERROR_RESPONSES)
def generate_story(request: StoryRequest, generator: StoryGenerator = Depends(get_generator)):
    logger.info(
        f"Generating {request.length.value} {request.tone.value} story",
        extra={"endpoint": "/generate-story"},
    )
    result = generator.generate_story(request)
    logger.info("Story generated successfully", extra={"endpoint": "/generate-story"})
    return result


@app.post("/generate-random-prompt", response_model=RandomPrompt, responses=ERROR_RESPONSES)
def generate_random_prompt(generator: StoryGenerator = Depends(get_generator)):
    logger.info("Generating random prompt", extra={"endpoint": "/generate-random-prompt"})
    prompt = generator.generate_random_prompt()
    logger.info("Random prompt generated successfully", extra={"endpoint": "/generate-random-prompt"})
    return RandomPrompt(prompt=prompt)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(json_format=settings.log_json, level=settings.log_level_value)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)

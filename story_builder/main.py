import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from story_builder.api import health, story
from story_builder.core.config import settings
from story_builder.core.errors import StoryError
from story_builder.core.logger import get_logger, log_api_request
from story_builder.web import routes as web_routes

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Starting {settings.PROJECT_NAME}: text_model={settings.TEXT_MODEL} image_model={settings.IMAGE_MODEL} "
        f"fallback={settings.DEV_FALLBACK} api_key={'set' if settings.DEEPINFRA_API_KEY else 'missing'}"
    )
    yield
    logger.info(f"{settings.PROJECT_NAME} stopped")


app = FastAPI(title="AI Story Builder API", version=settings.VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    log_api_request(request.method, request.url.path, response.status_code, (time.perf_counter() - start) * 1000)
    return response


@app.exception_handler(StoryError)
async def story_error_handler(request: Request, exc: StoryError):
    logger.warning(f"{request.url.path} failed: {exc.code} ({exc.status_code})")
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


#Include Routers
app.include_router(health.router, tags=["Health"])
app.include_router(story.router, prefix="/api", tags=["Story"])
app.include_router(web_routes.router)  # Client form at /


def run():
    uvicorn.run("story_builder.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()

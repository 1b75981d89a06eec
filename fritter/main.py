# fritter/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fritter.core.config import settings
from fritter.core.db import Base, engine
from fritter.core.errors import FritterError

# register every mapped class before the mappers are configured
from fritter.models.user import User  # noqa: F401
from fritter.models.freet import Freet  # noqa: F401
from fritter.models.merchant_freet import MerchantFreet  # noqa: F401
from fritter.models.fritter_pay import FritterPay  # noqa: F401

from fritter.routers.health import router as health_router
from fritter.routers.auth import router as auth_router
from fritter.routers.users import router as users_router
from fritter.routers.merchant_freets import router as merchant_freets_router
from fritter.routers.freets import router as freets_router
from fritter.routers.fritter_pay import router as fritter_pay_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Fritter API starting up (db=%s)", engine.url.get_backend_name())
    Base.metadata.create_all(bind=engine)
    yield
    logger.info("Fritter API shutting down")
    engine.dispose()


app = FastAPI(title="Fritter API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FritterError)
async def fritter_error_handler(request: Request, exc: FritterError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.error})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = {".".join(str(p) for p in e["loc"] if p != "body"): e["msg"] for e in exc.errors()}
    return JSONResponse(status_code=400, content={"error": errors})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# listings first so /api/posts/listings is not read as a freet id
routers = [
    health_router,
    auth_router,
    users_router,
    merchant_freets_router,
    freets_router,
    fritter_pay_router,
]

for r in routers:
    app.include_router(r)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("fritter.main:app", host="0.0.0.0", port=8000, log_level=settings.LOG_LEVEL.lower())

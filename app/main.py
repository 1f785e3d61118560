import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.routes import admin_courses, admin_jobs, admin_users, auth, courses, jobs, me, training
from app.core.config import get_settings
from app.core.errors import ApiError
from app.core.logging_config import clear_request_id, configure_logging, set_request_id
from app.db.seed import seed_if_needed
from app.db.session import SessionLocal

settings = get_settings()
configure_logging(level=settings.log_level, log_dir=settings.log_dir or None, log_file=settings.log_file)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    rid = set_request_id(request.headers.get("x-request-id"))
    try:
        response = await call_next(request)
    finally:
        clear_request_id()
    response.headers["X-Request-ID"] = rid
    return response


@app.exception_handler(ApiError)
async def handle_api_error(_, exc: ApiError):
    if exc.status_code >= 500:
        logger.warning("api error code=%s message=%s", exc.code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.on_event("startup")
def on_startup() -> None:
    if settings.app_env == "production" and settings.jwt_secret == "change-me":
        raise RuntimeError("JWT_SECRET must be set in production")

    if settings.seed_data:
        try:
            with SessionLocal() as db:
                seed_if_needed(db)
        except SQLAlchemyError as exc:
            raise RuntimeError("Database schema is not ready. Run: alembic upgrade head") from exc


app.include_router(auth.router)
app.include_router(me.router)
app.include_router(courses.router)
app.include_router(training.router)
app.include_router(jobs.router)
app.include_router(admin_courses.router)
app.include_router(admin_jobs.router)
app.include_router(admin_users.router)

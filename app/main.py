import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import admin as admin_router
from app.api.routes import auth
from app.api.routes import categories as categories_router
from app.api.routes import feedback as feedback_router
from app.api.routes import orders as orders_router
from app.api.routes import profile as profile_router
from app.api.routes import services as services_router
from app.core import config
from app.core.errors import AppError, InternalError
from app.db.base import SessionLocal, engine
from app.db.migrations import apply_migrations
from app.db.seed import seed_reference_data

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def init_database() -> None:
    """Apply pending migrations, then seed reference data. Failures are logged, not raised."""
    try:
        apply_migrations(engine)
    except SQLAlchemyError:
        logger.exception("Could not apply database migrations")
    db = SessionLocal()
    try:
        seed_reference_data(db)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Seeding reference data failed")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    init_database()
    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Septic Service API", version="0.1.0", lifespan=lifespan)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning(f"Validation error for {request.url.path}: {errors}")
    fields = ", ".join(".".join(str(p) for p in e.get("loc", ()) if p != "body") for e in errors)
    message = f"Invalid request data: {fields}" if fields else "Invalid request data"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"{request.method} {request.url.path} - database error", exc_info=exc)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


logger.info(f"CORS allowed origins: {config.ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"message": "Septic Service API running"}


app.include_router(auth.router, prefix="/api")
app.include_router(profile_router.router, prefix="/api")
app.include_router(categories_router.router, prefix="/api")
app.include_router(services_router.router, prefix="/api")
app.include_router(orders_router.router, prefix="/api")
app.include_router(feedback_router.router, prefix="/api")
app.include_router(admin_router.router, prefix="/api")

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import sys

from attendance_api.api.v1.attendance import router
from attendance_api.api.v1.dashboard import dashboard_router
from attendance_api.api.v1.reference import reference_router
from attendance_api.api.v1.students import str_router
from attendance_api.config import settings
from attendance_api.database import database
from attendance_api.exceptions import AttendanceAppError

handlers = [logging.StreamHandler(sys.stdout)]
if settings.LOG_FILE:
    handlers.append(logging.FileHandler(settings.LOG_FILE, encoding='utf-8'))

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=handlers
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application...")
    await database.connect()
    await database.create_tables()

    if settings.SEED_ON_STARTUP:
        from attendance_api.utils.seed_data import run_seed
        async with database.get_session() as session:
            await run_seed(session)

    logger.info("Application startup complete")
    yield

    logger.info("Shutting down application...")
    await database.disconnect()
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Student Attendance API",
    description="API for students, reference data, daily attendance and dashboard statistics",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(str_router)
app.include_router(router)
app.include_router(reference_router)
app.include_router(dashboard_router)


@app.get("/")
async def root():
    return {
        "message": "Welcome to Student Attendance API",
        "version": "1.0.0",
        "endpoints": {
            "students": "/students",
            "attendance": "/attendance",
            "departments": "/departments",
            "campuses": "/campuses",
            "levels": "/levels",
            "dashboard": "/dashboard/stats",
            "health": "/health"
        }
    }


@app.get("/health")
async def health_check():
    db_status = await database.check_connection()
    return {
        "status": "healthy" if db_status else "degraded",
        "database": "connected" if db_status else "disconnected"
    }


# Error handlers
@app.exception_handler(AttendanceAppError)
async def app_error_handler(request: Request, exc: AttendanceAppError):
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"{request.method} {request.url.path} failed ({exc.status_code}): {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message}
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning(f"{request.method} {request.url.path} rejected: {details}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": f"Invalid request - {details}"}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": str(exc) or "Internal server error"}
    )


if __name__ == "__main__":
    uvicorn.run("attendance_api.main:app", host="0.0.0.0", port=8000, reload=True)

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI

from lms.controllers import Courses, Enrollments, Progress
from lms.dependencies import cleanup_resources
from lms.helpers.Database import MongoDB
from lms.helpers.Logger import configure_logging
from lms.middleware.Cors import add_cors_middleware
from lms.middleware.GlobalErrorHandling import GlobalErrorHandlingMiddleware, add_exception_handlers
from lms.models.Progress import ProgressModel

load_dotenv()
configure_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="LMS Progress Engine",
    description="Course catalog, enrollment and learner progress tracking",
    version="1.0.0",
    docs_url="/api-docs",
    redoc_url="/api-redoc",
)

# Middleware
app.add_middleware(GlobalErrorHandlingMiddleware)
add_cors_middleware(app)
add_exception_handlers(app)

app.include_router(Courses.router)
app.include_router(Enrollments.router)
app.include_router(Progress.router)


@app.on_event("startup")
def startup_event():
    connection_string = os.getenv("MONGODB_CONNECTION_STRING", "mongodb://localhost:27017")
    MongoDB.connect(connection_string)
    logger.info("MongoDB connected")

    # builds the unique (user, course) index
    ProgressModel()


@app.on_event("shutdown")
def shutdown_event():
    logger.info("Shutting down LMS Progress Engine...")
    cleanup_resources()
    MongoDB.close()


@app.get("/")
def root():
    return {
        "service": "LMS Progress Engine",
        "status": "running",
    }


@app.get("/health")
def health_check():
    """Health check endpoint to verify the server is running"""
    db_status = MongoDB.connection_status()
    return {
        "status": "healthy",
        "database": db_status,
        "service": "LMS Progress Engine",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("lms.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "5000")), reload=True)

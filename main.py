import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from app.config import API_NAME, API_VERSION, ENVIRONMENT, PORT
from app.middleware.logger import logger_middleware
from app.routes import system, wishes
from app.services.database import init_db
from app.utils.logger import setup_logging
from app.utils.utils import utc_now_iso

setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if ENVIRONMENT == "development":
        logger.info(f"🎉 {API_NAME} is running! Mode: {ENVIRONMENT}, started at {utc_now_iso()}")
    yield
    logger.info(f"Shutting down {API_NAME}")

app = FastAPI(
    title=API_NAME,
    version=API_VERSION,
    description="API for managing wedding wishes and attendance",
    contact={"name": "mrofisr", "url": "https://github.com/mrofisr"},
    license_info={"name": "Apache 2.0", "url": "https://www.apache.org/licenses/LICENSE-2.0.html"},
    openapi_tags=[
        {"name": "system", "description": "System endpoints"},
        {"name": "wishes", "description": "Wishes endpoints"},
    ],
    docs_url="/swagger",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)
app.middleware("http")(logger_middleware)

# Include Routers
app.include_router(system.router)
app.include_router(wishes.router)

if __name__ == "__main__":
    logger.info(f"Running on port: {PORT}")
    uvicorn.run("main:app", host="0.0.0.0", port=PORT, reload=ENVIRONMENT == "development")

# Jalankan server: uvicorn main:app --reload

# myskool/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from myskool.config import settings
from myskool.database import Base, engine
from myskool.errors import (
    BadRequestAlertException,
    bad_request_alert_handler,
    validation_exception_handler,
)
from myskool.models import program, user  # noqa: F401  register tables
from myskool.routers import auth, programs
from myskool.utils.header_util import exposed_headers

import time
import logging
from fastapi import Request
from myskool.logging_config import setup_logging


setup_logging()
logger = logging.getLogger("myskool")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 建立資料表（若不存在）
    Base.metadata.create_all(bind=engine)
    logger.info("Started %s, API under %s", settings.APP_NAME, settings.API_PREFIX)
    yield


app = FastAPI(title="myskool Program API", version="1.0.0", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=exposed_headers(),
)

app.add_exception_handler(BadRequestAlertException, bad_request_alert_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Routers
app.include_router(auth.router)
app.include_router(programs.router)

@app.get("/")
def root():
    return {"message": "myskool backend is running!"}

"""
Main.py works as a main function for the application
Api app starts from here
"""

from contextlib import asynccontextmanager
from logging import getLogger
from logging.config import dictConfig

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.exceptions import UserServiceError
from app.database import init_db
from app.routers import user_router
from app.utils.logger import sample_logger


# ----------------------------------------------------------------------
# Lifespan: 앱 시작 시 DB 초기화
# ----------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CREATE_TABLES_ON_STARTUP:
        await init_db()
    logger.info(f"User API 시작 (phase={settings.DEPLOY_PHASE})")

    yield

    logger.info("User API 종료")


logger = getLogger(__name__)

# ----------------------------------------------------------------------
# FastAPI 애플리케이션 생성
# ----------------------------------------------------------------------
app = FastAPI(
    title="User Management API",
    description="FastAPI 기반 사용자 관리 (생성/수정/삭제/인증/검색) API",
    version="1.0.0",
    docs_url="/docs" if settings.docs_enabled else None,
    lifespan=lifespan,
)

# ----------------------------------------------------------------------
# 로거 설정
# ----------------------------------------------------------------------
dictConfig(sample_logger)

# ----------------------------------------------------------------------
# 예외 핸들러
# ----------------------------------------------------------------------


@app.exception_handler(UserServiceError)
async def user_service_exception_handler(request: Request, exc: UserServiceError):
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # 사용자 친화적인 에러 메시지 생성
    errors = exc.errors()
    error_messages = []

    for error in errors:
        loc = [str(part) for part in error.get("loc", []) if part != "body"]
        field = ".".join(loc) if loc else "body"
        msg = error.get("msg", "")
        error_messages.append(f"{field}: {msg}")

    # 로그 출력
    for message in error_messages:
        logger.warning(message)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"status": "Invalid request.", "errors": error_messages},
    )

# ----------------------------------------------------------------------
# CORS 설정
# ----------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ----------------------------------------------------------------------
# 라우터 등록
# ----------------------------------------------------------------------
app.include_router(user_router)  # 사용자 CRUD + 인증 + 검색 라우터 등록

# ----------------------------------------------------------------------
# 기본 라우트
# ----------------------------------------------------------------------


@app.get("/")
async def root():
    return {"status": "ok"}

# vibes/main.py

# ------------------------
# 환경 변수 로드
# ------------------------
from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager

# ------------------------
# FastAPI, CORS 미들웨어 import
# ------------------------
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vibes.config import settings
from vibes.db.base import init_db
from vibes.errors import AuthRequiredError, NotFoundError, StoreError, ValidationError

# ------------------------
# 라우터 import
# ------------------------
from vibes.routers import auth as auth_router
from vibes.routers import context as context_router
from vibes.routers import questions as questions_router
from vibes.routers import responses as responses_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ------------------------
# 1) FastAPI 앱 생성
#    - 로컬 sqlite 개발 시 AUTO_CREATE_TABLES=true 로 테이블 생성
# ------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        init_db()
        logger.info("tables created (%s)", settings.app_env)
    yield

app = FastAPI(title="Vibes Poll API", lifespan=lifespan)

# ------------------------
# 2) CORS 미들웨어 추가
#    - 기본값 전체 허용, 운영 시 CORS_ORIGINS 로 도메인 제한
# ------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,  # 쿠키 안 쓰면 False
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------
# 3) 서비스 예외 -> HTTP 응답
# ------------------------
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"message": exc.code, "detail": exc.message})

@app.exception_handler(AuthRequiredError)
async def auth_required_handler(request: Request, exc: AuthRequiredError):
    return JSONResponse(status_code=401, content={"message": "unauthorized", "detail": exc.message})

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"message": f"{exc.resource}_not_found"})

@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("store error on %s %s: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return JSONResponse(status_code=503, content={"message": "store_unavailable", "detail": exc.message})

# ------------------------
# 4) 라우터 등록
# ------------------------
app.include_router(auth_router.router)
app.include_router(context_router.router)
app.include_router(questions_router.router)
app.include_router(responses_router.router)

# ------------------------
# 5) Root 엔드포인트 (health check)
# ------------------------
@app.get("/")
def root():
    return {"ok": True}

from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Load environment variables from .env file in project root
# backend/app/main.py -> backend -> project root
env_path = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(env_path)

from app.api.report_routes import router as report_router  # noqa: E402
from app.api.routes import router as api_router  # noqa: E402
from app.api.static_routes import router as static_router  # noqa: E402
from app.core.config import get_settings  # noqa: E402
from app.core.exceptions import KakeiboError  # noqa: E402
from app.core.logging import get_logger  # noqa: E402

logger = get_logger("kakeibo.main")

app = FastAPI(title="Kakeibo API", version="0.1.0")

# Environment-based CORS configuration
ENVIRONMENT = get_settings().environment

LOCALHOST_ORIGINS = [
    "http://localhost:8000",
    "http://127.0.0.1:8000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

CORS_ORIGINS = {
    "development": LOCALHOST_ORIGINS,
    "production": [],
}

origins = CORS_ORIGINS.get(ENVIRONMENT, CORS_ORIGINS["development"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KakeiboError)
async def kakeibo_error_handler(request: Request, exc: KakeiboError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}", extra=exc.details)
    return JSONResponse(status_code=500, content={"detail": exc.message})


app.include_router(api_router)
app.include_router(report_router)
app.include_router(static_router)

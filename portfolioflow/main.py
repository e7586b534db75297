# portfolioflow/main.py
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from portfolioflow.admin.routes import router as admin_router
from portfolioflow.ai.routes import router as ai_router
from portfolioflow.api.routes import router as api_router
from portfolioflow.auth.auth import ensure_admin_from_env
from portfolioflow.chat.routes import router as chat_router
from portfolioflow.db.db import SessionLocal, init_db
from portfolioflow.pages.routes import router as pages_router
from portfolioflow.utils.template_engine import PACKAGE_DIR, templates

load_dotenv()

DEFAULT_CORS_ORIGINS = "http://localhost:8000,http://127.0.0.1:8000"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    db = SessionLocal()
    try:
        ensure_admin_from_env(db)
    finally:
        db.close()
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="PortfolioFlow", lifespan=lifespan)

    app.include_router(pages_router)
    app.include_router(api_router)
    app.include_router(ai_router)
    app.include_router(chat_router)
    app.include_router(admin_router)

    origins = [o.strip() for o in os.getenv(
        "CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Accept-Language",
            "Content-Language",
            "Content-Type",
            "Authorization",
            "Cookie",
        ],
    )

    app.mount("/static", StaticFiles(directory=PACKAGE_DIR /
              "static"), name="static")
    app.templates = templates
    return app


app = create_app()

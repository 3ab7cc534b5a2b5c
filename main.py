from dotenv import load_dotenv, find_dotenv
load_dotenv(find_dotenv())  # load .env before settings are read

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from caromar.core.config import settings
from caromar.core.errors import register_error_handlers
from caromar.core.logging import setup_logging
from caromar.core.middleware import RequestLoggingMiddleware
from caromar.routers import health, repos, user, analyze


setup_logging()

app = FastAPI(title="CAROMAR API", version=settings.VERSION)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(health.router, tags=["health"])
app.include_router(repos.router, tags=["repos"])
app.include_router(user.router, tags=["user"])
app.include_router(analyze.router, tags=["analyze"])

# uvicorn main:app --reload --port 3000

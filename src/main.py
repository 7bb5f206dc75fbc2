import importlib.util
import logging
import sys
from pathlib import Path

from fastapi import FastAPI

from src.apps.api import router
from src.config.settings import get_settings

settings = get_settings()

logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)

# --- アプリケーション初期化 ---

app = FastAPI(
    title="Repository Publish API",
    version="0.1.0",
    description="A FastAPI application for publishing workspace files to GitHub repositories",
)

# --- DEBUG設定に基づきモック用のパスを追加 ---

if settings.DEBUG:
    dev_path = Path(__file__).parent.parent / "dev"
    if dev_path.exists():
        sys.path.append(str(dev_path))
        print("🔧 'dev' directory added to sys.path for mock imports.")
        if importlib.util.find_spec("mocks.github_client") is None:
            print("⚠️ MockGitHubClient not found, falling back to real GitHubClient.")
    else:
        print("⚠️ 'dev' directory not found. Using real GitHubClient.")
else:
    print("🌐 Production mode: Using real GitHubClient")

app.include_router(router.router, prefix="/api")


@app.get("/health")
async def health_check():
    """
    Simple health check endpoint to confirm the API is running.
    """
    return {"status": "ok"}

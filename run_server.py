"""Run the server - development mode"""
import uvicorn

from app.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="127.0.0.1",
        port=5000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )

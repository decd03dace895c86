"""Local entry point: ``python -m libraryman.main`` serves the API with uvicorn."""

from libraryman.app_setup import build_app
from libraryman.config import get_settings

app = build_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "libraryman.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )

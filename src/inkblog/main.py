import uvicorn

from inkblog.core.config import get_settings


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "inkblog.app:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload,
        log_level=settings.logging.level.lower(),
        access_log=settings.environment == "development",
    )


if __name__ == "__main__":
    run()

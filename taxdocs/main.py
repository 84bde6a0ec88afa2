import uvicorn

from taxdocs.api.app import create_app
from taxdocs.config.settings import Settings
from taxdocs.database.connection import close_pool, init_pool
from taxdocs.logging.logger import Log


def main() -> None:
    """Entry point: initialize pool -> build services -> serve the API."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        app = create_app(settings)
        Log.info(f"Starting taxdocs API on {settings.api_host}:{settings.api_port}")
        uvicorn.run(
            app,
            host=settings.api_host,
            port=settings.api_port,
            log_level=settings.log_level.lower(),
        )
    finally:
        close_pool()


if __name__ == "__main__":
    main()

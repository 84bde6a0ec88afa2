from fastapi import FastAPI

from taxdocs.api.dependencies import ServiceContainer, build_container
from taxdocs.api.errors import register_exception_handlers
from taxdocs.api.routes import documents, scenarios
from taxdocs.config.settings import Settings


def create_app(settings: Settings, container: ServiceContainer | None = None) -> FastAPI:
    """Build the FastAPI application around an already built service container."""
    app = FastAPI(title="taxdocs", version="0.1.0")
    app.state.settings = settings
    app.state.container = container if container is not None else build_container(settings)

    register_exception_handlers(app)
    app.include_router(documents.router)
    app.include_router(scenarios.router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app

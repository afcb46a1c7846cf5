from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from livraria.auth import TokenService
from livraria.config import Settings, get_settings
from livraria.database import create_db_engine, create_session_factory, create_tables
from livraria.errors import setup_exception_handlers
from livraria.logger import get_logger
from livraria.routes import books, users
from livraria.schemas import Message

logger = get_logger(__name__)


# ----------------------------
# Lifespan: tables up, engine down
# ----------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Livraria API")
    create_tables(app.state.engine)
    yield
    logger.info("Shutting down Livraria API")
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around one store and one token service.

    Args:
        settings: Application settings. If None, loads from the environment.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(title="Livraria API", version="1.0.0", lifespan=lifespan)

    engine = create_db_engine(settings.database_url, echo=settings.debug)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.tokens = TokenService(
        settings.secret_jwt,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.token_ttl_minutes),
    )

    # ----------------------------
    # CORS Configuration
    # ----------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    # ----------------------------
    # Include routers
    # ----------------------------
    app.include_router(users.router)
    app.include_router(users.protected_router)
    app.include_router(books.router)
    app.include_router(books.public_router)

    @app.get("/", response_model=Message)
    def root():
        return {"message": "Hello World"}

    return app


def main():
    """Validate configuration, then serve with uvicorn."""
    import uvicorn

    from livraria.logger import setup_logging

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Server listening", host=settings.host, port=settings.port)

    uvicorn.run(
        "livraria.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

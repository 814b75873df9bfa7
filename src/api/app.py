import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from src.api.error import ClientError, client_error_handler, validation_error_handler
from src.api.routes import customers, orders, payments, transactions

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from src.depends import create_tables, engine

        await create_tables()
        logger.info("Ledger API started")
        yield
        await engine.dispose()
        logger.info("Ledger API stopped")

    app = FastAPI(
        title="Hardware Distribution Ledger API",
        description="Order ledgers, installment schedules and transaction exports",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    for module in (orders, customers, payments, transactions):
        app.include_router(module.router, prefix=config.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app

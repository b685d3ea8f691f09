from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hisab.api.routes import insights, organize, settings as settings_routes, transactions
from hisab.core import settings
from hisab.insights.llm import InsightGenerator
from hisab.ledger import Ledger
from hisab.logger import get_logger, setup_logging
from hisab.storage.json_file import JsonFileStore

logger = get_logger(__name__)


def create_app() -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()

        ledger = Ledger(JsonFileStore(data_dir=settings.DATA_DIR))
        ledger.load()

        insights = InsightGenerator()
        if not insights.enabled:
            logger.info("OPENAI_API_KEY not set. AI insights will be disabled.")

        app.state.ledger = ledger
        app.state.insights = insights

        logger.info("Services initialized.")
        yield
        logger.info("Service shutting down.")

    app = FastAPI(title="Hisab", lifespan=lifespan)

    app.include_router(transactions.router)
    app.include_router(organize.router)
    app.include_router(insights.router)
    app.include_router(settings_routes.router)

    return app


app = create_app()

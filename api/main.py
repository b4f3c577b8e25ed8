import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.dependencies import cleanup_dependencies, init_dependencies, startup_dependencies
from api.error_handlers import register_exception_handlers
from api.routes import currency, user
from config.logging_config import setup_logging
from config.settings import get_settings

settings = get_settings()
setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info('Starting Currency Rates API...')

	init_dependencies(settings)
	await startup_dependencies(settings)

	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await cleanup_dependencies()


app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)


@app.get('/health', tags=['health'])
async def health() -> dict:
	return {'status': 'ok'}


app.include_router(currency.router)
app.include_router(user.router)
register_exception_handlers(app)

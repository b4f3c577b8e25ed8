import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import (
	InvalidUserIdError,
	StoreError,
	UpstreamUnavailable,
	UserNotFoundError,
	UserNotIdentifiedError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(UpstreamUnavailable)
	async def upstream_error_handler(request: Request, exc: UpstreamUnavailable):
		logger.error(f'Upstream error: {exc}')
		return JSONResponse(status_code=500, content={'detail': 'Failed to fetch exchange rates'})

	@app.exception_handler(StoreError)
	async def store_error_handler(request: Request, exc: StoreError):
		logger.error(f'Store error: {exc}')
		return JSONResponse(status_code=500, content={'detail': 'Storage unavailable'})

	@app.exception_handler(InvalidUserIdError)
	async def invalid_user_id_handler(request: Request, exc: InvalidUserIdError):
		return JSONResponse(status_code=400, content={'detail': 'Invalid x-user-id'})

	@app.exception_handler(UserNotIdentifiedError)
	async def user_not_identified_handler(request: Request, exc: UserNotIdentifiedError):
		return JSONResponse(status_code=401, content={'detail': 'User not identified'})

	@app.exception_handler(UserNotFoundError)
	async def user_not_found_handler(request: Request, exc: UserNotFoundError):
		return JSONResponse(status_code=404, content={'detail': 'User not found'})

	@app.exception_handler(Exception)
	async def global_exception_handler(request: Request, exc: Exception):
		logger.error(f'Unhandled exception: {exc}', exc_info=True)
		return JSONResponse(status_code=500, content={'detail': 'Internal server error'})

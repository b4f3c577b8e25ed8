from fastapi import Request

from application.services.user_service import validate_user_id
from config.settings import get_settings


def get_visitor_id(request: Request) -> str | None:
	"""Visitor id from the identity header, falling back to the cookie.

	Returns ``None`` for an anonymous visitor and raises ``InvalidUserIdError``
	when a value is present but is not a UUID.
	"""
	settings = get_settings()
	user_id = request.headers.get(settings.USER_ID_HEADER) or request.cookies.get(
		settings.USER_ID_COOKIE
	)
	if not user_id:
		return None
	return validate_user_id(user_id)

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_user_service
from api.identity import get_visitor_id
from api.schemas import UserResponse, UserUpdateRequest
from application.services import UserService
from config.settings import get_settings
from domain.exceptions.currency import UserNotIdentifiedError

router = APIRouter(prefix='/api/user', tags=['user'])


@router.get(
	'',
	response_model=UserResponse,
	status_code=status.HTTP_200_OK,
	summary='Get the current visitor settings',
)
async def get_user(
	response: Response,
	service: Annotated[UserService, Depends(get_user_service)],
	user_id: Annotated[str | None, Depends(get_visitor_id)],
) -> UserResponse:
	if user_id is None:
		# Anonymous visitor: register a new profile and hand back its id.
		settings = get_settings()
		profile = await service.create_user()
		response.headers[settings.USER_ID_HEADER] = profile.user_id
		response.set_cookie(settings.USER_ID_COOKIE, profile.user_id, httponly=True, samesite='lax')
	else:
		profile = await service.get_user(user_id)

	return UserResponse(
		user_id=profile.user_id,
		base_currency=profile.base_currency,
		favorites=profile.favorites,
		created_at=profile.created_at,
		updated_at=profile.updated_at,
	)


@router.post(
	'',
	status_code=status.HTTP_204_NO_CONTENT,
	summary='Update the current visitor settings',
)
async def update_user(
	payload: UserUpdateRequest,
	service: Annotated[UserService, Depends(get_user_service)],
	user_id: Annotated[str | None, Depends(get_visitor_id)],
) -> Response:
	if user_id is None:
		raise UserNotIdentifiedError('No visitor id supplied')

	await service.update_user(user_id, base_currency=payload.base_currency, favorites=payload.favorites)
	return Response(status_code=status.HTTP_204_NO_CONTENT)

from .requests import UserUpdateRequest
from .responses import RatesResponse, UserResponse

__all__ = [
	'RatesResponse',
	'UserResponse',
	'UserUpdateRequest',
]

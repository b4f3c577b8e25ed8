from pydantic import BaseModel, Field, field_validator


class UserUpdateRequest(BaseModel):
	base_currency: str | None = Field(default=None, min_length=3, max_length=5)
	favorites: list[str] | None = None

	@field_validator('base_currency')
	@classmethod
	def uppercase_currency(cls, v: str | None):
		return v.strip().upper() if v else v

	@field_validator('favorites')
	@classmethod
	def uppercase_favorites(cls, v: list[str] | None):
		if v is None:
			return v
		return [code.strip().upper() for code in v if code.strip()]

	class ConfigDict:
		json_schema_extra = {'example': {'base_currency': 'EUR', 'favorites': ['USD', 'GBP']}}

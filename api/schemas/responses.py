from datetime import datetime

from pydantic import BaseModel, Field


class RatesResponse(BaseModel):
	base: str = Field(..., description='Base currency code')
	rates: dict[str, float] = Field(..., description='Rate from the base to each target currency')

	class ConfigDict:
		json_schema_extra = {'example': {'base': 'USD', 'rates': {'EUR': 0.855, 'JPY': 149.2}}}


class UserResponse(BaseModel):
	user_id: str = Field(..., description='Visitor identifier')
	base_currency: str = Field(..., description='Preferred base currency')
	favorites: list[str] = Field(default_factory=list, description='Favourite currency codes')
	created_at: datetime
	updated_at: datetime

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_currency_service, get_rate_service
from api.schemas import RatesResponse
from application.services import CurrencyService, RateService

router = APIRouter(prefix='/api', tags=['currency'])


@router.get(
	'/currencies',
	response_model=list[str],
	status_code=status.HTTP_200_OK,
	summary='List supported currencies',
)
async def get_supported_currencies(
	service: Annotated[CurrencyService, Depends(get_currency_service)],
) -> list[str]:
	currencies = await service.get_supported_currencies()
	return sorted(currencies)


@router.get(
	'/rates',
	response_model=RatesResponse,
	status_code=status.HTTP_200_OK,
	summary='Get exchange rates for a base currency',
)
async def get_rates(
	service: Annotated[RateService, Depends(get_rate_service)],
	base: Annotated[str | None, Query(max_length=5, description='Base currency, USD by default')] = None,
	targets: Annotated[
		str | None, Query(description='Comma separated target currencies, all supported by default')
	] = None,
) -> RatesResponse:
	target_list = targets.split(',') if targets else None
	result = await service.resolve_rates(base, target_list)
	return RatesResponse(**result)

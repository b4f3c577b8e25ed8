from .currency_service import CurrencyService
from .rate_service import RateService
from .user_service import UserService

__all__ = ['CurrencyService', 'RateService', 'UserService']

from .rate_api import RateAPIClient

__all__ = ['RateAPIClient']

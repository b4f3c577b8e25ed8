class CurrencyException(Exception):
    pass


class UpstreamUnavailable(CurrencyException):
    pass


class RateNotFoundError(UpstreamUnavailable):
    pass


class StoreError(CurrencyException):
    pass


class InvalidUserIdError(CurrencyException):
    pass


class UserNotIdentifiedError(CurrencyException):
    pass


class UserNotFoundError(CurrencyException):
    pass

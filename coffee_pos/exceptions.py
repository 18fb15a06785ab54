"""
Exception hierarchy shared by the store, services and API layers
"""


class CoffeePosError(Exception):
    """Base exception for Coffee POS errors"""
    pass


class ValidationError(CoffeePosError):
    """Input rejected before any write (missing field, empty item list, ...)"""
    pass


class NotFoundError(CoffeePosError):
    """Referenced order, token, product or record does not exist"""
    pass


class StoreError(CoffeePosError):
    """Underlying document store is unavailable, denied the call or returned garbage"""
    pass


class ConflictError(CoffeePosError):
    """Document changed since it was read; re-fetch and retry"""
    pass


class AuthError(CoffeePosError):
    """Sign-in rejected or session invalid"""
    pass

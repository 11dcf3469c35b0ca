from typing import List, Optional


class ShopError(Exception):
    """Base class for storefront errors raised by the services."""


class NotFound(ShopError):
    pass


class InvalidInput(ShopError):
    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.fields = fields or []


class AccessDenied(ShopError):
    """Raised by role gates; carries the view the caller should land on instead."""

    def __init__(self, redirect_to: str):
        super().__init__(f"redirect to {redirect_to}")
        self.redirect_to = redirect_to

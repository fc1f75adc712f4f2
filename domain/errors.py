from __future__ import annotations


class AccountError(Exception):
    """Base class for account-management exceptions."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AccountError):
    """Input was rejected before any business rule was evaluated."""


class BusinessLogicError(AccountError):
    """A business rule prevented the operation."""


class UnsupportedDomainError(ValidationError):
    pass


class DuplicateEmailError(BusinessLogicError):
    pass


class IdCollisionError(BusinessLogicError):
    """The next count-based id is still held by a live entity."""


class InvalidCredentialsError(BusinessLogicError):
    pass


class NoActiveSessionError(BusinessLogicError):
    pass


class RepositoryUnavailableError(BusinessLogicError):
    pass

"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class BackendAPIError(DomainException):
    """Backend API returned an error or is unavailable"""

    pass


class InvalidRecordError(BackendAPIError):
    """Backend record is malformed or invalid"""

    pass


class BusinessNotFoundError(DomainException):
    """Requested business does not exist on the backend"""

    pass


class ScenarioNotFoundError(DomainException):
    """Requested scenario does not belong to the business"""

    pass

"""
Service Exceptions
Raised by the service layer and mapped to HTTP responses in main.py
"""

from typing import Any, Optional


class ServiceError(ValueError):
    """Base class for business errors raised by services"""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BusinessRuleError(ServiceError):
    """A write would break an application-level invariant"""

    status_code = 400


class NotFoundError(ServiceError):
    """Entity not found"""

    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[Any] = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class AccessDeniedError(ServiceError):
    """Caller may not touch this tenant's data"""

    status_code = 403

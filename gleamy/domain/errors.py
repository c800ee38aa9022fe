"""Typed failures raised by the booking and job assignment workflows"""


class DomainError(Exception):
    """Base class; status_code is what the HTTP layer answers with"""

    status_code = 400
    code = "domain_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(DomainError):
    status_code = 404
    code = "not_found"


class Conflict(DomainError):
    status_code = 409
    code = "conflict"


class InvalidTransition(DomainError):
    status_code = 409
    code = "invalid_transition"

    def __init__(self, entity: str, current, target):
        current_value = getattr(current, "value", current)
        target_value = getattr(target, "value", target)
        super().__init__(f"{entity} cannot move from {current_value} to {target_value}")
        self.current = current
        self.target = target


class Unavailable(DomainError):
    status_code = 409
    code = "unavailable"


class Forbidden(DomainError):
    status_code = 403
    code = "forbidden"


class InvalidRequest(DomainError):
    status_code = 400
    code = "invalid_request"

# core/exceptions.py

class ApiError(Exception):
    """
    Base class for failures that are reported to the API client.
    Each subclass carries the HTTP status it maps to.
    """
    status_code = 500
    default_message = 'Internal Server Error'

    def __init__(self, message=None, **extra):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)


class ValidationFailed(ApiError):
    status_code = 400
    default_message = 'Invalid request'


class SlotUnavailable(ApiError):
    status_code = 400
    default_message = 'This time slot is already booked for this doctor'


class InvalidStatusTransition(ApiError):
    status_code = 400
    default_message = 'Status transition not allowed'


class Forbidden(ApiError):
    status_code = 403
    default_message = 'Forbidden'


class NotFound(ApiError):
    status_code = 404
    default_message = 'Not found'

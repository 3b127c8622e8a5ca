GENERIC_ERROR = {"message": "Something went wrong!"}


class StacksAPIError(Exception):
    status_code = 500
    message = GENERIC_ERROR["message"]

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self):
        return {"message": self.message}


class ValidationError(StacksAPIError):
    """Carries every field-level problem found in a payload."""
    status_code = 400
    message = "Validation failed"

    def __init__(self, errors):
        super().__init__()
        self.errors = list(errors)

    def to_dict(self):
        return {"errors": self.errors}


class NotFoundError(StacksAPIError):
    status_code = 404
    message = "Not found"

class BookNotFoundError(NotFoundError):
    message = "Book not found"

class MemberNotFoundError(NotFoundError):
    message = "Member not found"

class IssuanceNotFoundError(NotFoundError):
    message = "Issuance not found"

class BookUnavailableError(StacksAPIError):
    status_code = 400
    message = "Book not available for borrowing"

class ReturnRejectedError(StacksAPIError):
    status_code = 400
    message = "Cannot return book, all copies are already available"

class InvalidAPIKeyError(StacksAPIError):
    status_code = 403
    message = "Invalid API Key"

class RateLimitError(StacksAPIError):
    status_code = 429
    message = "Too many requests, please try again later."

class DatabaseError(StacksAPIError):
    """Store failure. The driver message is logged, never returned."""

    def to_dict(self):
        return dict(GENERIC_ERROR)

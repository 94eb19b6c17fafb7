"""
Errors the services report to clients.
Each class carries the HTTP status and the short title sent as "error".
"""


class ServiceError(Exception):
    status = 500
    error = "Internal server error"
    default_message = "An unexpected error occurred"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"error": self.error, "message": self.message}


class InvalidInput(ServiceError):
    status = 400
    error = "Invalid request body"


class InvalidUrl(ServiceError):
    status = 400
    error = "Invalid URL"
    default_message = "Please provide a Google Sheets or Google Docs URL."


class NoSourcePresent(ServiceError):
    status = 400
    error = "No document connected"
    default_message = "Please set a Google Sheets or Google Docs URL first."


class FetchError(ServiceError):
    """Reading the data source failed."""
    error = "Failed to connect to document"


class AccessDenied(FetchError):
    pass


class SourceNotFound(FetchError):
    pass


class FetchFailed(FetchError):
    pass


class AuthError(ServiceError):
    status = 401
    error = "Authentication error"
    default_message = "Invalid OpenAI API key"


class RateLimited(ServiceError):
    status = 429
    error = "Rate limit error"
    default_message = "OpenAI API rate limit exceeded"


class ModelServiceError(ServiceError):
    status = 503
    error = "AI service error"
    default_message = "Unable to process request with OpenAI"


class InternalError(ServiceError):
    pass


class DatabaseConnectionError(ServiceError):
    status = 503
    error = "Database connection error"
    default_message = "Unable to read documents from the database"

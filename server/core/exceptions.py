# server/core/exceptions.py

class AppError(Exception):
    """
    Base class for errors that end a request.
    `message` is safe to show to clients; `detail` is for server logs only.
    """
    status_code = 500
    message = "internal server error"

    def __init__(self, message: str | None = None, detail: str | None = None):
        if message is not None:
            self.message = message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    message = "invalid request body"


class ConflictError(AppError):
    status_code = 400
    message = "username already exists"


class AuthenticationError(AppError):
    status_code = 401
    message = "invalid username or password"


class StorageError(AppError):
    status_code = 500


class TokenError(AppError):
    status_code = 500

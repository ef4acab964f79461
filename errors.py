class ChainError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code:
            self.status_code = status_code

    def __str__(self):
        return self.message


class NotFound(ChainError):
    status_code = 404


class InvalidDate(ChainError, ValueError):
    status_code = 400


class Conflict(ChainError):
    status_code = 409

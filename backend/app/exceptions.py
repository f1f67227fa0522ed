"""Error taxonomy shared by services, stores and the HTTP layer.

Each error carries the HTTP status it maps to and a short message that is safe
to show to the caller.
"""


class WayfarerError(Exception):
    status_code = 500
    default_message = "Internal server error!"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(WayfarerError):
    status_code = 400
    default_message = "All fields are required!"


class ConflictError(WayfarerError):
    status_code = 400
    default_message = "Email already exists!"


class AuthenticationError(WayfarerError):
    status_code = 401
    default_message = "Access denied!"


class InvalidCredentialsError(AuthenticationError):
    # Same message for unknown email and wrong password
    status_code = 400
    default_message = "Invalid email or password!"


class AuthorizationError(WayfarerError):
    status_code = 403
    default_message = "Invalid token!"


class GatewayError(WayfarerError):
    status_code = 500
    default_message = "Error fetching data from the maps service."


class PersistenceError(WayfarerError):
    status_code = 500
    default_message = "Database operation failed."

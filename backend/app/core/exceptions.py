"""Domain errors raised by services and mapped to HTTP responses in app.main."""


class GreenThumbError(Exception):
    """Base class for application errors."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class InvalidInput(GreenThumbError, ValueError):
    """Missing or malformed request data."""

    status_code = 400


class InvalidFrequency(InvalidInput):
    def __init__(self, frequency_days=None):
        super().__init__(
            f"frequency_days must be a whole number of days between 1 and 36500 (got {frequency_days!r})."
        )
        self.frequency_days = frequency_days


class NotFound(GreenThumbError, LookupError):
    """Record does not exist or belongs to another user.

    The two cases are reported identically so callers cannot discover
    other users' data.
    """

    status_code = 404


class PlantNotFound(NotFound):
    def __init__(self, plant_id=None):
        super().__init__("Plant not found or access denied.")
        self.plant_id = plant_id


class ReminderNotFound(NotFound):
    def __init__(self, reminder_id=None):
        super().__init__("Reminder not found or access denied.")
        self.reminder_id = reminder_id


class StoreFailure(GreenThumbError):
    """Persistence layer fault; never retried automatically."""

    status_code = 500


class ExternalServiceError(GreenThumbError):
    """Third-party plant API failed or is not configured."""

    def __init__(self, message: str, status_code: int = 503):
        super().__init__(message)
        self.status_code = status_code

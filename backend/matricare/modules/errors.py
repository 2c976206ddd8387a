"""Exception hierarchy for the report backend."""


class MatriCareError(Exception):
    """Base class for all report backend errors."""


class NotFoundError(MatriCareError):
    """No record stored for the requested key."""


class HistoryNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Medical history not found for user {user_id}")


class DisplayNameNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Name not found in user document for user {user_id}")


class DataFormatError(MatriCareError):
    """Record exists but does not parse into the expected shape."""


class StoreError(MatriCareError):
    """The underlying document store call failed."""


class ModelUnavailableError(MatriCareError):
    """Scoring backend not loaded, or the scoring call failed."""

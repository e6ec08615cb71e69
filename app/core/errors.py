# errors.py
# Error taxonomy shared by the storage layer and the API routers.


class RecipeServiceError(Exception):
    """
    Base class for errors that map onto an HTTP response.
    """
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecipeValidationError(RecipeServiceError):
    """Missing or malformed input, or a CHECK constraint rejected by the database."""
    status_code = 400


class RecipeNotFoundError(RecipeServiceError):
    status_code = 404


class RecipeIntegrityError(RecipeServiceError):
    """A uniqueness or foreign key constraint the validation layer did not catch."""
    status_code = 400


class RecipeStorageError(RecipeServiceError):
    status_code = 500


class ServiceUnavailableError(RecipeServiceError):
    status_code = 503

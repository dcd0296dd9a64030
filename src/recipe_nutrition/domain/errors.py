"""Error taxonomy for matching and nutrition operations.

Missing matches and missing catalog rows are not errors: operations return
``None`` or an empty list for them.
"""


class RecipeNutritionError(Exception):
    """Base class for errors raised by this package."""

    code = "INTERNAL_ERROR"


class ValidationError(RecipeNutritionError):
    """Input is malformed or empty."""

    code = "VALIDATION_ERROR"


class DataSourceError(RecipeNutritionError):
    """A catalog or the match store could not be read or written."""

    code = "DB_ERROR"

    def __init__(self, action: str, message: str) -> None:
        super().__init__(f"{action}: {message}")
        self.action = action
        self.message = message

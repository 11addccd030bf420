"""Domain errors raised by the food lookup services."""


class FoodLookupError(Exception):
    """Base error for food lookups that should reach the caller."""


class InvalidBarcodeError(FoodLookupError):
    """Raised when a barcode is missing or too short."""


class ProductNotFoundError(FoodLookupError):
    """Raised when the food database has no product for a barcode."""


class LabelUnreadableError(FoodLookupError):
    """Raised when the vision model could not read a nutrition label."""


class MacroResolutionError(FoodLookupError):
    """Raised when no stage of the resolution chain produced macros."""


class RecipeInputError(FoodLookupError):
    """Raised when recipe input cannot be turned into an ingredient list."""


class SavedMealNotFoundError(FoodLookupError):
    """Raised when a saved meal does not exist for the user."""

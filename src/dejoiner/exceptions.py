"""Exception hierarchy for dejoiner."""


class DejoinerError(Exception):
    """Base exception for all dejoiner errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Store Errors
class StoreError(DejoinerError):
    """Resource store errors."""

    exit_code = 10
    user_message = "Resource store error"


class StoreConnectionError(StoreError):
    """Cannot open the resource database."""

    exit_code = 11
    user_message = "Cannot open resource database"


class ResourceNotFoundError(StoreError):
    """No resource with the requested id."""

    exit_code = 12
    user_message = "Resource not found"


# Config Errors
class ConfigError(DejoinerError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"


# Search Errors
class SearchError(DejoinerError):
    """Search-related errors."""

    exit_code = 30
    user_message = "Search error"


class DocumentFormatError(SearchError):
    """A design-file export could not be read as a document tree."""

    exit_code = 31
    user_message = "Not a design-file export. Expected a JSON object with a 'document' key."


# Command Errors
class CommandError(DejoinerError):
    """Command execution errors."""

    exit_code = 40
    user_message = "Command error"


class InputFileNotFoundError(CommandError):
    """Input file not found."""

    exit_code = 41
    user_message = "Input file not found"


class InvalidArgumentError(CommandError):
    """Invalid argument provided."""

    exit_code = 42
    user_message = "Invalid argument"

"""Exception hierarchy for dtool."""


class DToolError(Exception):
    """Base exception for all dtool errors."""

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


# Config Errors
class ConfigError(DToolError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"


# Command Errors
class CommandError(DToolError):
    """Domain errors raised by a command's transformation."""

    exit_code = 40
    user_message = "Command error"


class InvalidArgumentError(CommandError):
    """Semantically invalid input to a well-formed command."""

    exit_code = 42
    user_message = "Invalid argument"


# Registration Errors (programming errors, never user-facing)
class RegistrationError(DToolError):
    """The command table was built incorrectly."""

    exit_code = 70
    user_message = "Command registration error"


class SchemaError(RegistrationError):
    """An argument schema is malformed."""

    exit_code = 71
    user_message = "Malformed command schema"


class DuplicateCommandError(RegistrationError):
    """Two commands share the same name."""

    exit_code = 72
    user_message = "Command is already registered"


class RegistryLockedError(RegistrationError):
    """Registration attempted after the registry was built."""

    exit_code = 73
    user_message = "Command registry is read-only"


class UnknownCommandError(DToolError):
    """Dispatch received a name absent from the command table."""

    exit_code = 74
    user_message = "Unknown command"

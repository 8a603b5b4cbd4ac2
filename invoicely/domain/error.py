"""Domain layer errors."""

from dataclasses import dataclass


class DomainError(Exception):
    """Base domain error."""

    pass


@dataclass(frozen=True)
class FieldError:
    """A single invalid input field."""

    field: str
    message: str


class ValidationError(DomainError):
    """Input failed format or length rules."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        fields = ", ".join(e.field for e in errors)
        super().__init__(f"Invalid input: {fields}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """A write would break a uniqueness constraint."""

    def __init__(self, resource: str, field: str):
        self.resource = resource
        self.field = field
        super().__init__(f"{resource} with this {field} already exists")


class DuplicateEmailError(ConflictError):
    """Signup with an email that is already registered."""

    def __init__(self) -> None:
        super().__init__("User", "email")


class StoreUnavailableError(DomainError):
    """The backing store could not be reached. Safe for the caller to retry."""

    pass


class AuthenticationError(DomainError):
    """Base class for rejected credentials."""

    code = "unauthenticated"


class InvalidCredentialsError(AuthenticationError):
    """Email/password did not match.

    Raised for both unknown email and wrong password so the message does
    not reveal whether an account exists.
    """

    code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class ExternalOnlyAccountError(AuthenticationError):
    """Password login attempted on an account that only signs in with Google."""

    code = "external_only_account"

    def __init__(self) -> None:
        super().__init__("This account uses Google Sign-In. Please login with Google.")


class UnauthenticatedError(AuthenticationError):
    """No valid credential was presented."""

    code = "unauthenticated"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class IdentityResolutionError(DomainError):
    """An external profile could not be mapped to a local user.

    `transient` is set when the cause was the store being unavailable.
    """

    def __init__(self, message: str, transient: bool = False):
        self.transient = transient
        super().__init__(message)


class ProviderDisabledError(DomainError):
    """External sign-in was requested but the provider is not configured."""

    pass

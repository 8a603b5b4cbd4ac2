"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the authentication rules that span users,
    sessions and credentials.
    """

    pass

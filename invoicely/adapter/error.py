"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ProviderError(AdapterError):
    """External identity provider error."""

    pass


class ProviderProfileError(ProviderError):
    """Provider authenticated the user but returned no usable profile."""

    pass

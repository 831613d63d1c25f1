class ActivationError(Exception):
    """Base class for failures the activation workflow cannot turn into an outcome."""


class NotFoundError(ActivationError):
    """No user in the provider owns the given activation digest."""

    def __init__(self, message: str = "Activation link is invalid or has been tampered with"):
        super().__init__(message)
        self.message = message


class ConfigurationError(ActivationError):
    """A role referenced by the email mapping (or the default role) is missing."""

    def __init__(self, role_name: str, provider: str):
        self.role_name = role_name
        self.provider = provider
        self.message = f"Role '{role_name}' does not exist for provider '{provider}'"
        super().__init__(self.message)

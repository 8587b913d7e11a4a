"""
Error taxonomy for the Account Service.

Lookups that find nothing and failed logins are not errors here: the
services return None and the routes map that to 404 / 400.
"""


class AccountServiceError(Exception):
    """Base class for account service failures."""


class DuplicateUsernameError(AccountServiceError):
    """The store rejected a user because the username is already taken."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username '{username}' already exists")


class ConfigurationError(AccountServiceError):
    """Required process-wide configuration is missing or unusable."""

"""Exceptions shared between the repository and API layers."""


class PersistenceError(Exception):
    """Raised by repositories when the storage engine fails unexpectedly.

    The original storage exception is chained as ``__cause__`` and logged at
    the raise site; the message is safe to log but is never sent to clients.
    """


class DuplicateUserError(Exception):
    """Raised when creating a user whose username is already taken."""

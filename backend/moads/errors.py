"""
Error types shared by the data client, repository and form controllers.
"""
from typing import Dict, Optional


class ConfigurationError(Exception):
    """Required Supabase connection parameters are missing."""


class DataAccessError(Exception):
    """A list/create/update/delete call against the backend failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ValidationError(Exception):
    """
    Field-level validation failure for a campaign draft.

    Never reaches the backend. `errors` maps field name to message.
    """

    def __init__(self, errors: Dict[str, str]):
        super().__init__(", ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = dict(errors)

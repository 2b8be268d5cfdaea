"""Unified exception hierarchy for membership-registry."""


class RegistryError(Exception):
    """Base exception for all membership-registry errors."""


class ConfigError(RegistryError):
    """Missing or invalid configuration."""


# Record store
class RecordStoreError(RegistryError):
    """Base exception for record store operations."""


class StoreSchemaError(RecordStoreError):
    """Failed to create or initialize the registration sheet."""


class StoreReadError(RecordStoreError):
    """Failed to read registration rows."""


class StoreWriteError(RecordStoreError):
    """Failed to append a registration row."""


# Validation
class RegistrationValidationError(RegistryError):
    """One or more registration fields are invalid.

    Args:
        errors: Mapping of field name to a human-readable message.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid registration fields: {fields}")


# Endpoint client
class RegistryClientError(RegistryError):
    """Base exception for calls to the registration endpoint."""


class DuplicateCheckError(RegistryClientError):
    """The duplicate check request failed or returned garbage."""


class SubmissionError(RegistryClientError):
    """The submission request failed or returned garbage."""


class WorkflowError(RegistryError):
    """An action is not allowed in the form's current state."""

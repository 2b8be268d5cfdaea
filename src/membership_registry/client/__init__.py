"""Endpoint client and the registration form workflow."""

from membership_registry.client.api import RegistryAPIClient
from membership_registry.client.workflow import (
    RegistrationForm,
    FormState,
    Editing,
    CheckingDuplicate,
    Validating,
    Submitting,
    Submitted,
)

__all__ = [
    "RegistryAPIClient",
    "RegistrationForm",
    "FormState",
    "Editing",
    "CheckingDuplicate",
    "Validating",
    "Submitting",
    "Submitted",
]

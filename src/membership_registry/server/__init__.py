"""HTTP endpoint for duplicate checks and submissions."""

from membership_registry.server.app import create_app, ENDPOINT_PATH

__all__ = ["create_app", "ENDPOINT_PATH"]

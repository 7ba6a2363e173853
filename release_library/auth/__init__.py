"""Credential lookup for the GitHub release source."""

from .credentials import CredentialResolver

__all__ = ["CredentialResolver"]

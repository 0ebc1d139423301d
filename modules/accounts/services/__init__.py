"""
Accounts Services Package.
"""
from modules.accounts.services.identity_service import IdentityService

__all__ = ["IdentityService"]

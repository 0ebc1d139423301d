"""
Accounts Module - User identity (credentials and Google sign-in).

Structure:
- services/: Identity reconciliation against the users collection
- http_handlers/: FastAPI routes (/register, /login, /auth/google-signin)
"""
from modules.accounts.services.identity_service import IdentityService
from modules.accounts.http_handlers.auth import router as auth_router

__all__ = [
    "IdentityService",
    "auth_router",
]

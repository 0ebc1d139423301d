"""
Models package - Pydantic models for data validation.
"""
from shared.models.users_model import (
    UsersModel,
    Provider,
    LoginResult,
    GoogleSignInResult,
    RegisterRequest,
    LoginRequest,
    GoogleSignInRequest,
)
from shared.models.products_model import (
    ProductsModel,
    ProductCreate,
    ProductUpdate,
)

__all__ = [
    "UsersModel",
    "Provider",
    "LoginResult",
    "GoogleSignInResult",
    "RegisterRequest",
    "LoginRequest",
    "GoogleSignInRequest",
    "ProductsModel",
    "ProductCreate",
    "ProductUpdate",
]

"""
Users Model - Pydantic models for user records and auth requests.
"""
from pydantic import BaseModel, Field, field_validator
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    """Canonical form used for every lookup and every stored email."""
    return email.strip().lower()


class Provider(str, Enum):
    """How a user record was created or last signed in."""
    CREDENTIALS = "credentials"
    GOOGLE = "google"


class UsersModel(BaseModel):
    """
    Public view of a user record.

    The password hash lives only in the stored document and has no
    field here.
    """
    id: str
    name: Optional[str] = None
    email: str
    image: Optional[str] = None
    provider: Provider = Provider.CREDENTIALS
    google_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('email', mode='before')
    @classmethod
    def lowercase_email(cls, v):
        if isinstance(v, str):
            return normalize_email(v)
        return v

    @classmethod
    def from_document(cls, doc: dict) -> "UsersModel":
        """Create model from MongoDB document (camelCase stored fields)."""
        return cls(
            id=str(doc["_id"]),
            name=doc.get("name"),
            email=doc["email"],
            image=doc.get("image"),
            provider=doc.get("provider", Provider.CREDENTIALS),
            google_id=doc.get("googleId"),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )


class LoginResult(BaseModel):
    """What a successful credentials login hands back to the caller."""
    id: str
    name: Optional[str] = None
    email: str
    provider: Provider


class GoogleSignInResult(BaseModel):
    """Outcome of reconciling a Google sign-in with the stored users."""
    created: bool
    user: UsersModel


# --- Request bodies ---
# Fields are optional so that presence checks happen in the service and
# surface as a 400 with a readable message instead of a 422.

class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    image: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class GoogleSignInRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None
    google_id: Optional[str] = Field(default=None, alias="googleId")

    model_config = {"populate_by_name": True}

"""
Auth HTTP Handler - Credentials and Google sign-in routes.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from modules.accounts.services.identity_service import IdentityService
from shared.models.users_model import (
    GoogleSignInRequest,
    LoginRequest,
    RegisterRequest,
)


router = APIRouter(tags=["Auth"])


# --- Dependencies ---

def get_identity_service() -> IdentityService:
    """Dependency: Get identity service instance."""
    return IdentityService()


# --- Routes ---

@router.post("/register", status_code=201)
def register(
    request: RegisterRequest,
    identity_service: IdentityService = Depends(get_identity_service),
):
    """Register a user with email and password."""
    user_id = identity_service.register(
        request.name,
        request.email,
        request.password,
        image=request.image,
    )
    return {"message": "Registration successful", "id": user_id}


@router.post("/login")
def login(
    request: LoginRequest,
    identity_service: IdentityService = Depends(get_identity_service),
):
    """Verify email and password. No token is issued."""
    user = identity_service.login(request.email, request.password)
    return {"message": "Login successful", "user": user.model_dump(mode="json")}


@router.post("/auth/google-signin")
def google_signin(
    request: GoogleSignInRequest,
    identity_service: IdentityService = Depends(get_identity_service),
):
    """
    Google sign-in callback (called by the frontend's auth layer).

    - 201 when a new user was created
    - 200 when an existing user was found (and linked if needed)
    """
    result = identity_service.reconcile_google_sign_in(
        request.name,
        request.email,
        request.image,
        request.google_id,
    )

    if result.created:
        return JSONResponse(
            status_code=201,
            content={
                "message": "Google user created",
                "user": result.user.model_dump(mode="json"),
            },
        )

    return {
        "message": "Google login success",
        "user": result.user.model_dump(mode="json"),
    }

"""
Identity Service - Credentials registration/login and Google sign-in
reconciliation against the users collection.
"""
from typing import Optional

import bcrypt
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from shared.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    ValidationError,
)
from shared.persistance.mongo_db import mongo_pool
from shared.models.users_model import (
    GoogleSignInResult,
    LoginResult,
    Provider,
    UsersModel,
    normalize_email,
    utc_now,
)
from shared.services.logger import get_logger
from config.settings import settings


logger = get_logger(__name__)


BCRYPT_MAX_PASSWORD_BYTES = 72


class IdentityService:
    """
    Decides, per inbound identity assertion, whether to create a user,
    reject the request, or merge Google attributes onto an existing user.

    - Emails are always normalized (stripped, lowercased) before use
    - Uniqueness is enforced by the unique index on ``email``; a
      DuplicateKeyError on insert is the authoritative duplicate signal
    - A record's provider only ever moves credentials -> google
    """

    def __init__(
        self,
        collection: Optional[Collection] = None,
        bcrypt_rounds: Optional[int] = None,
    ):
        """
        Initialize identity service.

        Args:
            collection: MongoDB users collection (injected for testing, otherwise uses pool)
            bcrypt_rounds: bcrypt cost factor (defaults to settings.BCRYPT_ROUNDS)
        """
        self._collection = collection
        self._rounds = bcrypt_rounds or settings.BCRYPT_ROUNDS

    @property
    def collection(self) -> Collection:
        """Get users collection (lazy-loaded from pool if not injected)."""
        if self._collection is None:
            self._collection = mongo_pool.get_collection(
                settings.USERS_COLLECTION,
                settings.MONGO_DB,
            )
        return self._collection

    @staticmethod
    def _password_bytes(password: str) -> bytes:
        """bcrypt only reads the first 72 bytes; cut explicitly so long passwords hash."""
        return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]

    def _hash_password(self, password: str) -> str:
        """Hash password with a per-user salt (bcrypt)."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(self._password_bytes(password), salt).decode("utf-8")

    @classmethod
    def _check_password(cls, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(cls._password_bytes(password), hashed.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        image: Optional[str] = None,
    ) -> str:
        """
        Register a new credentials user.

        Returns the new user id.

        Raises:
            ValidationError: name, email or password missing
            DuplicateUserError: a user with this email already exists
        """
        if not email or not email.strip():
            raise ValidationError("Email is required")
        if not name or not name.strip() or not password:
            raise ValidationError("Name and password are required")

        email = normalize_email(email)
        logger.info(f"Registering new user: {email}")

        # Unique index on email is authoritative; see insert below
        if self.collection.find_one({"email": email}, {"_id": 1}):
            logger.warning(f"Email already exists: {email}")
            raise DuplicateUserError()

        now = utc_now()
        user_doc = {
            "name": name.strip(),
            "email": email,
            "password": self._hash_password(password),
            "image": image or None,
            "provider": Provider.CREDENTIALS.value,
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning(f"Email registered concurrently: {email}")
            raise DuplicateUserError()

        user_id = str(result.inserted_id)
        logger.info(f"User registered: {user_id}")
        return user_id

    def login(self, email: Optional[str], password: Optional[str]) -> LoginResult:
        """
        Verify credentials.

        Every failure raises the same InvalidCredentialsError so callers
        cannot tell an unknown email from a wrong password. Session
        handling is the caller's job.
        """
        if not email or not password:
            raise ValidationError("Email & Password required")

        email = normalize_email(email)
        logger.info(f"Login attempt for: {email}")
        user = self.collection.find_one({"email": email})

        if not user:
            logger.warning(f"Login failed - user not found: {email}")
            raise InvalidCredentialsError()

        hashed = user.get("password")
        if not hashed:
            logger.warning(f"Login failed - no password set (OAuth-only user): {email}")
            raise InvalidCredentialsError()

        if not self._check_password(password, hashed):
            logger.warning(f"Login failed - wrong password: {email}")
            raise InvalidCredentialsError()

        logger.info(f"Login successful: {email}")
        return LoginResult(
            id=str(user["_id"]),
            name=user.get("name"),
            email=user["email"],
            provider=user.get("provider", Provider.CREDENTIALS),
        )

    def reconcile_google_sign_in(
        self,
        name: Optional[str],
        email: Optional[str],
        image: Optional[str],
        google_id: Optional[str],
    ) -> GoogleSignInResult:
        """
        Create or merge a user for a Google sign-in.

        - No user for the email: insert one with provider=google
        - User without googleId: attach googleId, set provider=google,
          take the incoming image only if it is non-empty
        - User already linked: returned unchanged

        Idempotent: repeating the call never clears a googleId or
        replaces a stored image with an empty one. The stored password
        hash, if any, is kept and never returned.
        """
        if not email or not email.strip():
            raise ValidationError("Email required")
        if not google_id:
            raise ValidationError("Google ID required")

        email = normalize_email(email)
        logger.info(f"Google sign-in for: {email}")

        user = self.collection.find_one({"email": email})

        if user is None:
            now = utc_now()
            user_doc = {
                "name": name,
                "email": email,
                "image": image or None,
                "googleId": google_id,
                "provider": Provider.GOOGLE.value,
                "createdAt": now,
                "updatedAt": now,
            }
            try:
                result = self.collection.insert_one(user_doc)
            except DuplicateKeyError:
                # Lost a race with another sign-in or registration; merge instead
                logger.warning(f"User created concurrently, merging: {email}")
                user = self.collection.find_one({"email": email})
            else:
                user_doc["_id"] = result.inserted_id
                logger.info(f"Google user created: {result.inserted_id}")
                return GoogleSignInResult(
                    created=True,
                    user=UsersModel.from_document(user_doc),
                )

        if not user.get("googleId"):
            user = self._link_google(user, image, google_id)

        return GoogleSignInResult(created=False, user=UsersModel.from_document(user))

    def _link_google(self, user: dict, image: Optional[str], google_id: str) -> dict:
        """Attach a Google identity to an existing, not yet linked user."""
        fields = {
            "googleId": google_id,
            "provider": Provider.GOOGLE.value,
            "updatedAt": utc_now(),
        }
        if image:
            fields["image"] = image

        # Matching on googleId=None keeps a concurrent link from being overwritten
        updated = self.collection.find_one_and_update(
            {"_id": user["_id"], "googleId": None},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )

        if updated is None:
            logger.info(f"User already linked concurrently: {user['_id']}")
            return self.collection.find_one({"_id": user["_id"]}) or user

        logger.info(f"Linked Google account to user: {user['_id']}")
        return updated

    def normalize_stored_emails(self) -> int:
        """
        Lowercase emails stored before normalization was enforced.

        Runs at startup, before the unique index is built. A record whose
        normalized email already belongs to another record is left as is
        and logged for a manual merge.

        Returns:
            Number of records rewritten
        """
        normalized = 0

        for doc in self.collection.find({}, {"email": 1}):
            email = doc.get("email")
            if not isinstance(email, str):
                continue
            target = normalize_email(email)
            if target == email:
                continue

            clash = self.collection.find_one(
                {"email": target, "_id": {"$ne": doc["_id"]}}, {"_id": 1}
            )
            if clash:
                logger.warning(
                    f"Email collision, not normalized: {doc['_id']} ({email}) vs {clash['_id']}"
                )
                continue

            try:
                self.collection.update_one({"_id": doc["_id"]}, {"$set": {"email": target}})
            except DuplicateKeyError:
                logger.warning(f"Email collision, not normalized: {doc['_id']} ({email})")
                continue
            normalized += 1

        logger.info(f"Stored emails normalized: {normalized} records rewritten")
        return normalized

"""Authentication service - user accounts and profiles."""
import logging
from datetime import datetime

from pymongo.errors import DuplicateKeyError

from app.models.user import User, UserUpdate
from app.utils.auth import create_access_token, hash_password, verify_password
from app.utils.errors import NotFoundError, to_object_id

logger = logging.getLogger(__name__)


class AuthService:
    """Service for handling user authentication."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.users = db["users"]

    def _doc_to_user(self, doc: dict) -> User:
        return User(
            _id=str(doc["_id"]),
            email=doc["email"],
            full_name=doc.get("full_name", ""),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def register_user(self, email: str, password: str, full_name: str) -> User:
        """
        Register a new user.

        Args:
            email: User email address
            password: Plain text password
            full_name: Display name for the profile

        Returns:
            User object (without password)

        Raises:
            ValueError: If email is already registered
        """
        existing = await self.users.find_one({"email": email})
        if existing:
            raise ValueError("Email already registered")

        now = datetime.utcnow()
        user_doc = {
            "email": email,
            "hashed_password": hash_password(password),
            "full_name": full_name,
            "created_at": now,
            "updated_at": now,
        }

        try:
            result = await self.users.insert_one(user_doc)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration
            raise ValueError("Email already registered")
        user_doc["_id"] = result.inserted_id
        logger.info("Registered user %s", result.inserted_id)

        return self._doc_to_user(user_doc)

    async def login(self, email: str, password: str) -> str:
        """
        Login user and return JWT token.

        Raises:
            ValueError: If credentials are invalid
        """
        user_doc = await self.users.find_one({"email": email})
        if not user_doc:
            raise ValueError("Invalid email or password")

        if not verify_password(password, user_doc["hashed_password"]):
            raise ValueError("Invalid email or password")

        return create_access_token(user_id=str(user_doc["_id"]))

    async def get_user_by_id(self, user_id: str) -> User:
        """
        Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        object_id = to_object_id(user_id, "User not found")

        user_doc = await self.users.find_one({"_id": object_id})
        if not user_doc:
            raise NotFoundError("User not found")

        return self._doc_to_user(user_doc)

    async def update_profile(self, user_id: str, user_update: UserUpdate) -> User:
        """
        Update profile metadata.

        Raises:
            NotFoundError: If user not found
        """
        object_id = to_object_id(user_id, "User not found")

        update_doc = {"updated_at": datetime.utcnow()}
        if user_update.full_name is not None:
            update_doc["full_name"] = user_update.full_name

        user_doc = await self.users.find_one_and_update(
            {"_id": object_id},
            {"$set": update_doc},
            return_document=True,
        )
        if not user_doc:
            raise NotFoundError("User not found")

        logger.info("Updated profile of user %s", user_id)
        return self._doc_to_user(user_doc)

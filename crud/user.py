"""
UserRepository for database operations on User model
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from database_models import User


class UserRepository:
    """
    Repository class for User database operations.
    Encapsulates all database logic for the User model.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the repository with a database session.

        Args:
            db: AsyncSession instance for database operations
        """
        self.db = db

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        """
        Retrieve a user by ID.

        Args:
            user_id: User's ID

        Returns:
            User object if found, None otherwise
        """
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_user_by_app_user_id(self, app_user_id: str) -> Optional[User]:
        """
        Retrieve a user by the RevenueCat app_user_id stored on the row.

        Args:
            app_user_id: External identifier, compared verbatim

        Returns:
            User object if found, None otherwise
        """
        result = await self.db.execute(
            select(User).where(User.revenuecat_app_user_id == app_user_id)
        )
        return result.scalar_one_or_none()

    async def create_user(self, user_data: dict) -> User:
        """
        Create a new user in the database.

        Args:
            user_data: Dictionary containing user data. All keys optional:
                - email: str
                - revenuecat_app_user_id: str
                - has_trial: bool (defaults to True)
                - is_subscribed: bool (defaults to False)

        Returns:
            Created User object
        """
        email = user_data.get("email")
        user = User(
            email=email.lower() if email else None,
            revenuecat_app_user_id=user_data.get("revenuecat_app_user_id"),
            has_trial=user_data.get("has_trial", True),
            is_subscribed=user_data.get("is_subscribed", False),
        )
        self.db.add(user)
        await self.db.flush()  # Flush to get the ID without committing
        await self.db.refresh(user)  # Refresh to get the generated ID
        return user

    async def update_user(self, user: User, updates: dict) -> User:
        """
        Update user fields.

        Args:
            user: User object to update
            updates: Dictionary of fields to update (e.g., {"is_subscribed": True})

        Returns:
            Updated User object
        """
        for key, value in updates.items():
            if hasattr(user, key):
                setattr(user, key, value)

        await self.db.flush()
        await self.db.refresh(user)
        return user

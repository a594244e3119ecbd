"""
Service for User business logic.

Handles all business operations related to users: creation with hashed
passwords, username uniqueness and authentication.
"""

from typing import List, Optional, Dict, Any
import logging

from services.base_service import BaseService
from repositories.user_repository import UserRepository
from repositories.person_repository import PersonRepository
from database.models import UserORM
from database.db import hash_password, verify_password
from models.users import User, UserCreate, UserUpdate
from core.exceptions import DuplicateException, NotFoundException

logger = logging.getLogger(__name__)


class UserService(BaseService[UserORM, UserRepository]):
    """Service for managing user business logic."""

    def __init__(self, repository: UserRepository, person_repository: PersonRepository):
        """
        Initialize user service.

        Args:
            repository: UserRepository instance
            person_repository: PersonRepository used to validate person_id
        """
        super().__init__(repository)
        self.person_repository = person_repository

    def create_user(self, user_data: UserCreate) -> User:
        """
        Create a new user.

        Raises:
            DuplicateException: If username already exists
            NotFoundException: If person_id does not exist
        """
        if self.repository.exists_username(user_data.username):
            raise DuplicateException(
                resource="Usuario",
                field="username",
                value=user_data.username
            )
        if user_data.person_id is not None:
            self.person_repository.get_by_id_or_fail(user_data.person_id)

        salt_hex, hash_hex = hash_password(user_data.password)

        user_orm = UserORM(
            username=user_data.username,
            email=user_data.email,
            person_id=user_data.person_id,
            password_salt=salt_hex,
            password_hash=hash_hex,
        )

        created = self.repository.create(user_orm)
        logger.info(f"User {created.id} ({created.username}) created")

        return self._to_response_model(created)

    def get_user(self, user_id: int) -> User:
        """
        Get a user by ID.

        Raises:
            NotFoundException: If user not found
        """
        return self._to_response_model(self.get_by_id_or_fail(user_id))

    def get_users(
        self,
        page: int = 0,
        page_size: int = 50,
        active_only: bool = False
    ) -> tuple[List[Dict[str, Any]], int]:
        users, total = self.get_all(page, page_size, active_only=active_only, order_by="username")
        return [self._to_response_model(u).model_dump() for u in users], total

    def update_user(self, user_id: int, user_update: UserUpdate) -> User:
        """
        Update a user.

        Raises:
            NotFoundException: If user or person not found
            DuplicateException: If username already exists
            BusinessException: If user is deactivated
        """
        user = self.get_by_id_or_fail(user_id)
        self.validate_active(user)

        update_data = user_update.model_dump(exclude_unset=True)

        if "username" in update_data and self.repository.exists_username(
            update_data["username"], exclude_id=user.id
        ):
            raise DuplicateException(
                resource="Usuario",
                field="username",
                value=update_data["username"]
            )
        if update_data.get("person_id") is not None:
            self.person_repository.get_by_id_or_fail(update_data["person_id"])

        password = update_data.pop("password", None)
        if password:
            user.password_salt, user.password_hash = hash_password(password)

        updated = self.repository.update(self.apply_changes(user, update_data))
        logger.info(f"User {user_id} updated")
        return self._to_response_model(updated)

    def authenticate(self, username: str, password: str) -> Optional[UserORM]:
        """
        Verifica credenciales.

        Returns:
            El usuario si las credenciales son válidas, None en caso contrario
        """
        user = self.repository.find_by_username(username)
        if not user or not verify_password(user.password_salt, user.password_hash, password):
            return None
        return user

    def get_role_names(self, user_id: int) -> List[str]:
        return self.repository.get_role_names(user_id)

    def _to_response_model(self, user: UserORM) -> User:
        if user is None:
            raise NotFoundException(resource="Usuario")
        response = User.model_validate(user)
        response.role_names = self.repository.get_role_names(user.id)
        return response

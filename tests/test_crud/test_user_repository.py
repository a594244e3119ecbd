"""
Tests for UserRepository.

Tests cover:
- Finding by username
- Username uniqueness checks
- Role names through direct SQL
"""

import pytest

from database.context import ApplicationDbContext
from database.models import UserORM, RolORM, UserRolORM
from repositories.user_repository import UserRepository


@pytest.fixture
def user_repository(db_context: ApplicationDbContext) -> UserRepository:
    """Create a UserRepository instance."""
    return UserRepository(db_context)


class TestUserRepositoryFind:
    """Tests for username lookups."""

    def test_buscar_por_username(self, user_repository: UserRepository, regular_user: UserORM):
        found = user_repository.find_by_username("lgomez")

        assert found is not None
        assert found.id == regular_user.id

    def test_buscar_username_inexistente(self, user_repository: UserRepository):
        assert user_repository.find_by_username("nadie") is None

    def test_username_existe(self, user_repository: UserRepository, regular_user: UserORM):
        assert user_repository.exists_username("lgomez") is True
        assert user_repository.exists_username("lgomez", exclude_id=regular_user.id) is False


class TestUserRepositoryRoles:
    """Tests for get_role_names."""

    def test_roles_del_administrador(self, user_repository: UserRepository, admin_user: UserORM):
        assert user_repository.get_role_names(admin_user.id) == ["Administrador"]

    def test_usuario_sin_roles(self, user_repository: UserRepository, regular_user: UserORM):
        assert user_repository.get_role_names(regular_user.id) == []

    def test_roles_ordenados(
        self,
        db_session,
        user_repository: UserRepository,
        regular_user: UserORM,
        admin_rol: RolORM,
        aprendiz_rol: RolORM
    ):
        db_session.add_all([
            UserRolORM(user_id=regular_user.id, rol_id=admin_rol.id),
            UserRolORM(user_id=regular_user.id, rol_id=aprendiz_rol.id),
        ])
        db_session.commit()

        assert user_repository.get_role_names(regular_user.id) == ["Administrador", "Aprendiz"]

    def test_rol_inactivo_no_cuenta(
        self,
        db_session,
        user_repository: UserRepository,
        admin_user: UserORM,
        admin_rol: RolORM
    ):
        """Test a deactivated rol no longer grants its name."""
        admin_rol.active = False
        db_session.commit()

        assert user_repository.get_role_names(admin_user.id) == []

"""
Tests for UserRolRepository.

Tests cover:
- Assigning roles to a user
- Replacing the assigned roles
- Duplicated rol ids
"""

import pytest

from database.context import ApplicationDbContext
from database.models import UserORM, RolORM, ChangeLogORM
from repositories.user_rol_repository import UserRolRepository


@pytest.fixture
def user_rol_repository(db_context: ApplicationDbContext) -> UserRolRepository:
    """Create a UserRolRepository instance."""
    return UserRolRepository(db_context)


class TestUserRolAssign:
    """Tests for assign_roles."""

    def test_asignar_roles(
        self,
        user_rol_repository: UserRolRepository,
        regular_user: UserORM,
        admin_rol: RolORM,
        aprendiz_rol: RolORM
    ):
        assigned = user_rol_repository.assign_roles(regular_user.id, [admin_rol.id, aprendiz_rol.id])

        assert sorted(u.rol_id for u in assigned) == sorted([admin_rol.id, aprendiz_rol.id])

    def test_reemplazar_roles(
        self,
        user_rol_repository: UserRolRepository,
        admin_user: UserORM,
        admin_rol: RolORM,
        aprendiz_rol: RolORM
    ):
        """Test roles not in the new list are removed."""
        assigned = user_rol_repository.assign_roles(admin_user.id, [aprendiz_rol.id])

        assert [u.rol_id for u in assigned] == [aprendiz_rol.id]

    def test_reasignar_mismos_roles_no_cambia_nada(
        self,
        db_context: ApplicationDbContext,
        user_rol_repository: UserRolRepository,
        admin_user: UserORM,
        admin_rol: RolORM
    ):
        """Test an identical assignment keeps the existing row."""
        original = user_rol_repository.find_by_user(admin_user.id)[0].id

        assigned = user_rol_repository.assign_roles(admin_user.id, [admin_rol.id])

        assert [u.id for u in assigned] == [original]
        assert db_context.set(ChangeLogORM).count() == 0

    def test_roles_duplicados_se_ignoran(
        self,
        user_rol_repository: UserRolRepository,
        regular_user: UserORM,
        aprendiz_rol: RolORM
    ):
        assigned = user_rol_repository.assign_roles(regular_user.id, [aprendiz_rol.id, aprendiz_rol.id])

        assert len(assigned) == 1

    def test_quitar_todos_los_roles(
        self,
        user_rol_repository: UserRolRepository,
        admin_user: UserORM
    ):
        assert user_rol_repository.assign_roles(admin_user.id, []) == []

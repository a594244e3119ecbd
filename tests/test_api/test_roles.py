"""
Tests for Rol and user-rol API endpoints.

Tests cover:
- Admin only rol management
- Listing roles
- Assigning roles to users (replace semantics)
"""

from typing import Dict

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from database.models import UserORM, RolORM


class TestRolManagement:
    """Tests for /roles."""

    def test_crear_rol_como_admin(self, client: TestClient, auth_headers_admin: Dict[str, str]):
        response = client.post(
            "/roles/",
            json={"type_rol": "Instructor", "description": "Orienta aprendices"},
            headers=auth_headers_admin
        )

        assert response.status_code == 201
        assert response.json()["type_rol"] == "Instructor"

    def test_crear_rol_sin_permisos(self, client: TestClient, auth_headers_user: Dict[str, str]):
        response = client.post("/roles/", json={"type_rol": "Instructor"}, headers=auth_headers_user)

        assert response.status_code == 403

    def test_crear_rol_duplicado(self, client: TestClient, auth_headers_admin: Dict[str, str]):
        response = client.post("/roles/", json={"type_rol": "Administrador"}, headers=auth_headers_admin)

        assert response.status_code == 400

    def test_listar_roles(
        self,
        client: TestClient,
        auth_headers_user: Dict[str, str],
        admin_rol: RolORM,
        aprendiz_rol: RolORM
    ):
        response = client.get("/roles/", headers=auth_headers_user)

        assert response.status_code == 200
        assert [r["type_rol"] for r in response.json()["data"]] == ["Administrador", "Aprendiz"]

    def test_desactivar_rol_quita_acceso(
        self,
        client: TestClient,
        auth_headers_admin: Dict[str, str],
        aprendiz_rol: RolORM
    ):
        response = client.delete(f"/roles/{aprendiz_rol.id}", headers=auth_headers_admin)

        assert response.status_code == 200

        response = client.get("/roles/", params={"active_only": True}, headers=auth_headers_admin)
        assert [r["type_rol"] for r in response.json()["data"]] == ["Administrador"]

        response = client.patch(f"/roles/{aprendiz_rol.id}/restore", headers=auth_headers_admin)
        assert response.status_code == 200
        assert response.json()["active"] is True


class TestUserRolAssignment:
    """Tests for /user-roles."""

    def test_asignar_roles(
        self,
        client: TestClient,
        auth_headers_admin: Dict[str, str],
        regular_user: UserORM,
        aprendiz_rol: RolORM
    ):
        response = client.post(
            "/user-roles/assign",
            json={"user_id": regular_user.id, "rol_ids": [aprendiz_rol.id]},
            headers=auth_headers_admin
        )

        assert response.status_code == 200
        assert [a["rol_id"] for a in response.json()] == [aprendiz_rol.id]

        response = client.get(f"/user-roles/user/{regular_user.id}", headers=auth_headers_admin)
        assert [a["rol_id"] for a in response.json()] == [aprendiz_rol.id]

    def test_reemplazar_roles(
        self,
        client: TestClient,
        auth_headers_admin: Dict[str, str],
        admin_user: UserORM,
        admin_rol: RolORM,
        aprendiz_rol: RolORM
    ):
        """Test assigning a new list removes the roles not listed."""
        response = client.post(
            "/user-roles/assign",
            json={"user_id": admin_user.id, "rol_ids": [admin_rol.id, aprendiz_rol.id]},
            headers=auth_headers_admin
        )
        assert response.status_code == 200

        response = client.get("/users/me", headers=auth_headers_admin)
        assert response.json()["role_names"] == ["Administrador", "Aprendiz"]

    def test_asignar_rol_inexistente(
        self,
        client: TestClient,
        auth_headers_admin: Dict[str, str],
        regular_user: UserORM
    ):
        response = client.post(
            "/user-roles/assign",
            json={"user_id": regular_user.id, "rol_ids": [999]},
            headers=auth_headers_admin
        )

        assert response.status_code == 404

    def test_asignar_rol_desactivado(
        self,
        client: TestClient,
        db_session: Session,
        auth_headers_admin: Dict[str, str],
        regular_user: UserORM,
        aprendiz_rol: RolORM
    ):
        aprendiz_rol.active = False
        db_session.commit()

        response = client.post(
            "/user-roles/assign",
            json={"user_id": regular_user.id, "rol_ids": [aprendiz_rol.id]},
            headers=auth_headers_admin
        )

        assert response.status_code == 400

    def test_asignar_sin_rol_admin(
        self,
        client: TestClient,
        auth_headers_user: Dict[str, str],
        regular_user: UserORM,
        aprendiz_rol: RolORM
    ):
        response = client.post(
            "/user-roles/assign",
            json={"user_id": regular_user.id, "rol_ids": [aprendiz_rol.id]},
            headers=auth_headers_user
        )

        assert response.status_code == 403

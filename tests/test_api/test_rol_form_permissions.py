"""
Tests for rol / form / permission API endpoints.

Tests cover:
- Assigning permissions to a rol
- Permissions grouped by form and by user
- Hard delete of an assignment
"""

from typing import Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from database.models import FormORM, PermissionORM, RolORM, UserORM


@pytest.fixture
def catalog(db_session: Session):
    forms = [FormORM(name="Personas", path="/persons"), FormORM(name="Usuarios", path="/users")]
    permissions = [PermissionORM(name="Consultar"), PermissionORM(name="Editar")]
    db_session.add_all(forms + permissions)
    db_session.commit()
    return {"forms": forms, "permissions": permissions}


def _assign(client: TestClient, headers: Dict[str, str], rol_id: int, catalog):
    forms, permissions = catalog["forms"], catalog["permissions"]
    return client.post(
        "/rol-form-permissions/assign",
        json={
            "rol_id": rol_id,
            "form_permissions": [
                {"form_id": forms[0].id, "permission_ids": [p.id for p in permissions]},
                {"form_id": forms[1].id, "permission_ids": [permissions[0].id]},
            ],
        },
        headers=headers
    )


class TestAssignPermissions:
    """Tests for POST /rol-form-permissions/assign."""

    def test_asignar_permisos(
        self,
        client: TestClient,
        auth_headers_admin: Dict[str, str],
        admin_rol: RolORM,
        catalog
    ):
        response = _assign(client, auth_headers_admin, admin_rol.id, catalog)

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 2
        assert sorted(data[0]["permission_ids"]) == sorted(p.id for p in catalog["permissions"])

    def test_asignar_permisos_sin_rol_admin(
        self,
        client: TestClient,
        auth_headers_user: Dict[str, str],
        admin_rol: RolORM,
        catalog
    ):
        response = _assign(client, auth_headers_user, admin_rol.id, catalog)

        assert response.status_code == 403

    def test_asignar_formulario_inexistente(
        self,
        client: TestClient,
        auth_headers_admin: Dict[str, str],
        admin_rol: RolORM,
        catalog
    ):
        response = client.post(
            "/rol-form-permissions/assign",
            json={"rol_id": admin_rol.id, "form_permissions": [{"form_id": 999, "permission_ids": []}]},
            headers=auth_headers_admin
        )

        assert response.status_code == 404

    def test_asignar_lista_vacia_no_borra_permisos(
        self,
        client: TestClient,
        auth_headers_admin: Dict[str, str],
        admin_rol: RolORM,
        catalog
    ):
        """Test an empty assignment is rejected and the stored permissions survive."""
        _assign(client, auth_headers_admin, admin_rol.id, catalog)

        response = client.post(
            "/rol-form-permissions/assign",
            json={"rol_id": admin_rol.id, "form_permissions": []},
            headers=auth_headers_admin
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "Datos incompletos para la asignación"
        listing = client.get("/rol-form-permissions/", headers=auth_headers_admin)
        assert listing.json()["pagination"]["total_items"] == 3

    def test_listar_asignaciones(
        self,
        client: TestClient,
        auth_headers_admin: Dict[str, str],
        admin_rol: RolORM,
        catalog
    ):
        _assign(client, auth_headers_admin, admin_rol.id, catalog)

        response = client.get("/rol-form-permissions/", headers=auth_headers_admin)

        assert response.status_code == 200
        assert response.json()["pagination"]["total_items"] == 3


class TestPermissionQueries:
    """Tests for the grouped permission endpoints."""

    def test_permisos_por_rol(
        self,
        client: TestClient,
        auth_headers_admin: Dict[str, str],
        admin_rol: RolORM,
        catalog
    ):
        _assign(client, auth_headers_admin, admin_rol.id, catalog)

        response = client.get(f"/rol-form-permissions/rol/{admin_rol.id}", headers=auth_headers_admin)

        assert response.status_code == 200
        assert [fp["form_id"] for fp in response.json()] == [f.id for f in catalog["forms"]]

    def test_permisos_por_usuario_agrupados(
        self,
        client: TestClient,
        auth_headers_admin: Dict[str, str],
        admin_user: UserORM,
        admin_rol: RolORM,
        catalog
    ):
        """Test permissions come grouped by rol, then by form."""
        _assign(client, auth_headers_admin, admin_rol.id, catalog)

        response = client.get(f"/rol-form-permissions/user/{admin_user.id}", headers=auth_headers_admin)

        assert response.status_code == 200
        assert response.json() == [
            {
                "rol": "Administrador",
                "forms": [
                    {"name": "Personas", "permissions": ["Consultar", "Editar"]},
                    {"name": "Usuarios", "permissions": ["Consultar"]},
                ],
            }
        ]

    def test_permisos_de_usuario_sin_roles(
        self,
        client: TestClient,
        auth_headers_user: Dict[str, str],
        regular_user: UserORM
    ):
        response = client.get(f"/rol-form-permissions/user/{regular_user.id}", headers=auth_headers_user)

        assert response.status_code == 200
        assert response.json() == []

    def test_permisos_de_usuario_inexistente(self, client: TestClient, auth_headers_user: Dict[str, str]):
        assert client.get("/rol-form-permissions/user/999", headers=auth_headers_user).status_code == 404


class TestDeleteAssignment:
    """Tests for DELETE /rol-form-permissions/{id}."""

    def test_eliminar_asignacion(
        self,
        client: TestClient,
        auth_headers_admin: Dict[str, str],
        admin_rol: RolORM,
        catalog
    ):
        _assign(client, auth_headers_admin, admin_rol.id, catalog)
        first = client.get("/rol-form-permissions/", headers=auth_headers_admin).json()["data"][0]

        response = client.delete(f"/rol-form-permissions/{first['id']}", headers=auth_headers_admin)

        assert response.status_code == 200
        total = client.get("/rol-form-permissions/", headers=auth_headers_admin).json()["pagination"]["total_items"]
        assert total == 2

"""
Tests for ServiceContext (unit of work over several services).

Tests cover:
- Commit when the block finishes
- Rollback of every service write when the block fails
- Catalog services by prefix
"""

import pytest
from sqlalchemy.orm import Session

from core.exceptions import NotFoundException
from database.models import PersonORM, RegionalORM, ChangeLogORM
from dependencies import ServiceContext
from models.persons import PersonCreate
from models.organization import RegionalCreate
from models.roles import UserRolAssign


def _person_payload(number: int = 1075000200) -> PersonCreate:
    return PersonCreate(
        first_name="Sofía",
        first_last_name="Cárdenas",
        type_identification="TI",
        number_identification=number,
    )


class TestServiceContext:
    """Tests for the shared transaction of ServiceContext."""

    def test_confirma_al_salir(self, db_session: Session):
        with ServiceContext(db_session) as ctx:
            person = ctx.person_service.create_person(_person_payload())
            regional = ctx.catalog_service("/regionals").create(
                RegionalCreate(name="Huila", code_regional="41")
            )

        db_session.rollback()

        assert db_session.get(PersonORM, person.id) is not None
        assert db_session.get(RegionalORM, regional.id) is not None
        assert db_session.query(ChangeLogORM).count() == 2

    def test_revierte_todo_ante_error(self, db_session: Session):
        """Test a failure after several writes undoes all of them."""
        with pytest.raises(NotFoundException):
            with ServiceContext(db_session) as ctx:
                ctx.person_service.create_person(_person_payload())
                ctx.user_rol_service.assign_roles(UserRolAssign(user_id=999, rol_ids=[]))

        assert db_session.query(PersonORM).count() == 0
        assert db_session.query(ChangeLogORM).count() == 0

    def test_servicios_comparten_contexto(self, db_session: Session):
        with ServiceContext(db_session) as ctx:
            assert ctx.person_service is ctx.person_service
            assert ctx.user_service.repository.context is ctx.rol_service.repository.context
            ctx.rollback()

    def test_catalogo_desconocido(self, db_session: Session):
        with ServiceContext(db_session) as ctx:
            with pytest.raises(KeyError):
                ctx.catalog_service("/no-existe")

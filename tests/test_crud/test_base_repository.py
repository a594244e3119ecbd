"""
Tests for BaseRepository CRUD operations.

Tests cover:
- Creating and finding entities
- Pagination, ordering and active filter
- Counting with filters
- Logical delete / restore
- Physical delete
"""

import pytest

from database.context import ApplicationDbContext
from database.models import RegionalORM, ChangeLogORM
from repositories.base_repository import BaseRepository
from core.exceptions import NotFoundException, DatabaseException


@pytest.fixture
def regional_repository(db_context: ApplicationDbContext) -> BaseRepository:
    """Create a BaseRepository for regionals."""
    return BaseRepository(db_context, RegionalORM)


@pytest.fixture
def regionales(regional_repository: BaseRepository):
    nombres = [("Antioquia", "05"), ("Cundinamarca", "25"), ("Huila", "41")]
    return [
        regional_repository.create(RegionalORM(name=name, code_regional=code))
        for name, code in nombres
    ]


class TestBaseRepositoryCreate:
    """Tests for creating entities."""

    def test_crear_regional(self, regional_repository: BaseRepository):
        created = regional_repository.create(RegionalORM(name="Tolima", code_regional="73"))

        assert created.id is not None
        assert created.active is True
        assert created.create_date is not None

    def test_crear_registra_auditoria(self, regional_repository: BaseRepository, db_context):
        """Test every write through the repository leaves a change_log row."""
        created = regional_repository.create(RegionalORM(name="Tolima", code_regional="73"))

        log = db_context.set(ChangeLogORM).one()
        assert log.entity_name == "Regional"
        assert log.entity_id == str(created.id)

    def test_crear_invalido_lanza_database_exception(self, regional_repository: BaseRepository):
        """Test driver errors are translated to DatabaseException."""
        with pytest.raises(DatabaseException):
            regional_repository.create(RegionalORM(name="Sin código"))

    def test_entity_name(self, regional_repository: BaseRepository):
        assert regional_repository.entity_name == "Regional"


class TestBaseRepositoryRead:
    """Tests for reading entities."""

    def test_obtener_por_id(self, regional_repository: BaseRepository, regionales):
        found = regional_repository.get_by_id(regionales[1].id)

        assert found is not None
        assert found.name == "Cundinamarca"

    def test_obtener_inexistente(self, regional_repository: BaseRepository):
        assert regional_repository.get_by_id(999) is None
        assert regional_repository.exists(999) is False

    def test_obtener_o_fallar(self, regional_repository: BaseRepository):
        with pytest.raises(NotFoundException) as exc_info:
            regional_repository.get_by_id_or_fail(999)

        assert "Regional" in exc_info.value.message

    def test_listar_paginado(self, regional_repository: BaseRepository, regionales):
        page = regional_repository.get_all(skip=1, limit=1)

        assert [r.name for r in page] == ["Cundinamarca"]

    def test_listar_ordenado_desc(self, regional_repository: BaseRepository, regionales):
        items = regional_repository.get_all(order_by="name", order_desc=True)

        assert [r.name for r in items] == ["Huila", "Cundinamarca", "Antioquia"]

    def test_orden_por_campo_inexistente_usa_id(self, regional_repository: BaseRepository, regionales):
        items = regional_repository.get_all(order_by="no_existe")

        assert [r.id for r in items] == sorted(r.id for r in regionales)

    def test_contar_con_filtros(self, regional_repository: BaseRepository, regionales):
        assert regional_repository.count() == 3
        assert regional_repository.count(code_regional="41") == 1


class TestBaseRepositoryDelete:
    """Tests for logical and physical delete."""

    def test_desactivar_y_restaurar(self, regional_repository: BaseRepository, regionales):
        regional = regionales[0]

        regional_repository.set_active(regional, False)

        assert regional.active is False
        assert regional.delete_date is not None
        assert regional_repository.count(active_only=True) == 2
        assert len(regional_repository.get_all(active_only=True)) == 2

        regional_repository.set_active(regional, True)

        assert regional.active is True
        assert regional.delete_date is None
        assert regional_repository.count(active_only=True) == 3

    def test_eliminar_fisicamente(self, regional_repository: BaseRepository, regionales):
        regional_id = regionales[2].id

        regional_repository.delete(regionales[2])

        assert regional_repository.get_by_id(regional_id) is None
        assert regional_repository.count() == 2

"""
Tests for ApplicationDbContext.save_changes / save_changes_async.

Tests cover:
- Affected entity counts for added, modified and deleted entities
- Audit dates and change_log rows
- Rollback on database errors
- Deferred acceptance (accept_all_changes_on_success=False)
- Explicit transactions
- Cancellation of the asynchronous save
"""

import asyncio
import threading

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import DatabaseException
from database.context import ApplicationDbContext
from database.models import ChangeLogORM, PersonORM, RolORM


def _person(number: int = 1075000100) -> PersonORM:
    return PersonORM(
        first_name="Andrés",
        first_last_name="Pardo",
        type_identification="CC",
        number_identification=number,
    )


class TestSaveChangesCount:
    """Tests for the number of affected entities returned by a save."""

    def test_guardar_entidad_nueva(self, db_context: ApplicationDbContext):
        """Test adding one entity reports one change and assigns its id."""
        person = _person()
        db_context.add(person)

        affected = db_context.save_changes()

        assert affected == 1
        assert person.id is not None
        assert db_context.set(PersonORM).count() == 1

    def test_guardar_varias_operaciones(self, db_context: ApplicationDbContext):
        """Test one add, one modification and one delete count as three."""
        modificada = _person(1)
        eliminada = _person(2)
        db_context.add_range([modificada, eliminada])
        db_context.save_changes()

        modificada.first_name = "Camilo"
        db_context.remove(eliminada)
        db_context.add(_person(3))

        assert db_context.save_changes() == 3
        assert db_context.set(PersonORM).count() == 2
        assert db_context.find(PersonORM, modificada.id).first_name == "Camilo"

    def test_guardar_sin_cambios(self, db_context: ApplicationDbContext):
        assert db_context.save_changes() == 0

    def test_asignar_mismo_valor_no_cuenta(self, db_context: ApplicationDbContext):
        """Test re-assigning an identical value is not a net change."""
        person = _person()
        db_context.add(person)
        db_context.save_changes()

        person.first_name = person.first_name

        assert db_context.save_changes() == 0

    def test_guardar_async(self, db_context: ApplicationDbContext):
        """Test the asynchronous save reports the same count as the sync one."""
        db_context.add_range([_person(10), _person(11)])

        affected = asyncio.run(db_context.save_changes_async())

        assert affected == 2
        assert db_context.set(PersonORM).count() == 2

    def test_eliminar_varias_async(self, db_context: ApplicationDbContext):
        db_context.add_range([_person(20), _person(21), _person(22)])
        db_context.save_changes()

        db_context.remove_range(db_context.set(PersonORM).all())

        assert asyncio.run(db_context.save_changes_async()) == 3
        assert db_context.set(PersonORM).count() == 0


class TestSaveChangesAudit:
    """Tests for audit dates and change_log rows written on save."""

    def test_fechas_de_auditoria(self, db_context: ApplicationDbContext):
        """Test create_date is set on insert and update_date on update."""
        person = _person()
        db_context.add(person)
        db_context.save_changes()

        assert person.create_date is not None
        assert person.update_date is None

        person.email = "andres.pardo@example.com"
        db_context.save_changes()

        assert person.update_date is not None

    def test_change_log_por_operacion(self, db_context: ApplicationDbContext):
        """Test one change_log row per added, modified and deleted entity."""
        person = _person()
        db_context.add(person)
        db_context.save_changes()
        person_id = person.id

        person.first_name = "Camilo"
        db_context.save_changes()

        db_context.remove(person)
        db_context.save_changes()

        rows = db_context.set(ChangeLogORM).order_by(ChangeLogORM.id).all()
        assert [r.change_type for r in rows] == ["added", "modified", "deleted"]
        assert all(r.entity_name == "Person" for r in rows)
        assert all(r.entity_id == str(person_id) for r in rows)
        assert "first_name" in rows[0].changed_fields.split(",")
        assert "first_name" in rows[1].changed_fields.split(",")
        assert "number_identification" not in rows[1].changed_fields.split(",")

    def test_change_log_deshabilitado(self, db_session: Session):
        context = ApplicationDbContext(db_session, change_log_enabled=False)
        context.add(_person())

        assert context.save_changes() == 1
        assert context.set(ChangeLogORM).count() == 0


class TestSaveChangesErrors:
    """Tests for failures during a save."""

    def test_error_de_integridad_hace_rollback(self, db_context: ApplicationDbContext):
        """Test the driver error propagates unchanged and nothing is persisted."""
        db_context.add(RolORM(type_rol="Instructor"))
        db_context.add(RolORM(type_rol="Instructor"))

        with pytest.raises(IntegrityError):
            db_context.save_changes()

        assert db_context.set(RolORM).count() == 0
        assert db_context.set(ChangeLogORM).count() == 0

    def test_error_async_hace_rollback(self, db_context: ApplicationDbContext):
        db_context.add_range([_person(5), _person(5)])

        with pytest.raises(IntegrityError):
            asyncio.run(db_context.save_changes_async())

        assert db_context.set(PersonORM).count() == 0

    def test_contexto_usable_despues_del_error(self, db_context: ApplicationDbContext):
        db_context.add_range([RolORM(type_rol="Aprendiz"), RolORM(type_rol="Aprendiz")])
        with pytest.raises(IntegrityError):
            db_context.save_changes()

        db_context.add(RolORM(type_rol="Aprendiz"))

        assert db_context.save_changes() == 1


class TestDeferredAcceptance:
    """Tests for accept_all_changes_on_success=False."""

    def test_sin_aceptar_se_puede_deshacer(self, db_context: ApplicationDbContext):
        """Test a save that is not accepted can still be rolled back."""
        db_context.add(_person())

        assert db_context.save_changes(accept_all_changes_on_success=False) == 1
        assert db_context.set(PersonORM).count() == 1

        db_context.rollback()

        assert db_context.set(PersonORM).count() == 0

    def test_aceptar_cambios_despues(self, db_context: ApplicationDbContext):
        db_context.add(_person())
        db_context.save_changes(accept_all_changes_on_success=False)

        db_context.accept_all_changes()
        db_context.rollback()

        assert db_context.set(PersonORM).count() == 1


class TestExplicitTransaction:
    """Tests for begin_transaction."""

    def test_transaccion_confirma_al_salir(self, db_context: ApplicationDbContext):
        with db_context.begin_transaction():
            db_context.add(_person())
            db_context.save_changes()
            assert db_context.has_explicit_transaction is True

        db_context.rollback()

        assert db_context.has_explicit_transaction is False
        assert db_context.set(PersonORM).count() == 1

    def test_transaccion_revierte_ante_error(self, db_context: ApplicationDbContext):
        """Test saves inside a failed transaction are all rolled back."""
        with pytest.raises(RuntimeError):
            with db_context.begin_transaction():
                db_context.add(_person(1))
                db_context.save_changes()
                db_context.add(_person(2))
                db_context.save_changes()
                raise RuntimeError("fallo intermedio")

        assert db_context.has_explicit_transaction is False
        assert db_context.set(PersonORM).count() == 0
        assert db_context.set(ChangeLogORM).count() == 0

    def test_rollback_explicito(self, db_context: ApplicationDbContext):
        transaction = db_context.begin_transaction()
        db_context.add(_person())
        db_context.save_changes()

        transaction.rollback()

        assert transaction.is_active is False
        assert db_context.set(PersonORM).count() == 0

    def test_transaccion_doble_falla(self, db_context: ApplicationDbContext):
        """Test a second explicit transaction cannot be opened."""
        transaction = db_context.begin_transaction()
        try:
            with pytest.raises(DatabaseException):
                db_context.begin_transaction()
        finally:
            transaction.rollback()

        assert db_context.has_explicit_transaction is False


class TestSaveChangesCancellation:
    """Tests for cancelling the asynchronous save."""

    def test_cancelacion_espera_al_comando_en_curso(
        self,
        db_context: ApplicationDbContext,
        monkeypatch: pytest.MonkeyPatch,
    ):
        """Test cancellation surfaces only after the in-flight write finishes."""
        started = threading.Event()
        release = threading.Event()
        original_flush = db_context.session.flush

        def slow_flush(*args, **kwargs):
            started.set()
            release.wait(timeout=5)
            return original_flush(*args, **kwargs)

        monkeypatch.setattr(db_context.session, "flush", slow_flush)
        db_context.add(RolORM(type_rol="Coordinador"))

        async def scenario():
            task = asyncio.ensure_future(db_context.save_changes_async())
            await asyncio.to_thread(started.wait, 5)
            task.cancel()
            await asyncio.sleep(0.05)
            assert not task.done()

            release.set()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(scenario())
        monkeypatch.undo()

        assert db_context.set(RolORM).filter_by(type_rol="Coordinador").count() == 1

"""
Service for Person business logic.
"""

from typing import List, Dict, Any
import logging

from services.base_service import BaseService
from repositories.person_repository import PersonRepository
from database.models import PersonORM
from models.persons import Person, PersonCreate, PersonUpdate
from core.exceptions import DuplicateException, NotFoundException

logger = logging.getLogger(__name__)


class PersonService(BaseService[PersonORM, PersonRepository]):
    """Service for managing person business logic."""

    def create_person(self, person_data: PersonCreate) -> Person:
        """
        Create a new person.

        Raises:
            DuplicateException: If the identification number is already registered
        """
        if self.repository.exists_document(person_data.number_identification):
            raise DuplicateException(
                resource="Persona",
                field="number_identification",
                value=str(person_data.number_identification)
            )

        data = person_data.model_dump()
        data["type_identification"] = person_data.type_identification.value
        created = self.repository.create(PersonORM(**data))

        logger.info(f"Person {created.id} created")
        return Person.model_validate(created)

    def get_person(self, person_id: int) -> Person:
        return Person.model_validate(self.get_by_id_or_fail(person_id))

    def get_person_by_document(self, number_identification: int) -> Person:
        """
        Find an active person by identification number.

        Raises:
            NotFoundException: If no active person has that document
        """
        person = self.repository.find_by_document(number_identification)
        if person is None or person.delete_date is not None:
            raise NotFoundException("Persona", str(number_identification))
        return Person.model_validate(person)

    def get_persons(
        self,
        page: int = 0,
        page_size: int = 50,
        active_only: bool = False
    ) -> tuple[List[Dict[str, Any]], int]:
        persons, total = self.get_all(page, page_size, active_only=active_only, order_by="first_last_name")
        return [Person.model_validate(p).model_dump() for p in persons], total

    def update_person(self, person_id: int, person_update: PersonUpdate) -> Person:
        """
        Update a person (partial).

        Raises:
            NotFoundException: If person not found
            DuplicateException: If the new identification number is taken
            BusinessException: If person is deactivated
        """
        person = self.get_by_id_or_fail(person_id)
        self.validate_active(person)

        update_data = person_update.model_dump(exclude_unset=True)
        if "number_identification" in update_data and self.repository.exists_document(
            update_data["number_identification"], exclude_id=person.id
        ):
            raise DuplicateException(
                resource="Persona",
                field="number_identification",
                value=str(update_data["number_identification"])
            )
        if update_data.get("type_identification") is not None:
            update_data["type_identification"] = update_data["type_identification"].value

        updated = self.repository.update(self.apply_changes(person, update_data))
        logger.info(f"Person {person_id} updated")
        return Person.model_validate(updated)

"""Person CRUD service."""

import structlog

from safetynet.db.store import RecordStore
from safetynet.errors import NotFoundError
from safetynet.schemas.person import Person

logger = structlog.get_logger(__name__)


class PersonService:
    """Reads and mutates residents; every mutation returns the stored record."""

    def __init__(self, store: RecordStore):
        self.persons = store.persons

    def get_all(self) -> list[Person]:
        return self.persons.all()

    def get(self, first_name: str, last_name: str) -> Person:
        person = self.persons.get((first_name, last_name))
        if person is None:
            logger.info("person_not_found", first_name=first_name, last_name=last_name)
            raise NotFoundError("Person", f"{first_name} {last_name}")
        return person

    def add(self, person: Person) -> Person:
        self.persons.add(person)
        logger.info("person_added", first_name=person.first_name, last_name=person.last_name)
        return self.get(person.first_name, person.last_name)

    def update(self, person: Person) -> Person:
        self.persons.update(person)
        logger.info("person_updated", first_name=person.first_name, last_name=person.last_name)
        return self.get(person.first_name, person.last_name)

    def delete(self, first_name: str, last_name: str) -> Person:
        removed = self.persons.delete((first_name, last_name))
        logger.info("person_deleted", first_name=first_name, last_name=last_name)
        return removed

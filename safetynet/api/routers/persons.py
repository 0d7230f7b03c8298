"""Person CRUD endpoints."""

from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, Response

from safetynet.api.deps import NON_BLANK, get_person_service
from safetynet.schemas.person import Person
from safetynet.services.person_service import PersonService

router = APIRouter(tags=["persons"])


@router.get("/persons", response_model=list[Person])
def list_persons(service: PersonService = Depends(get_person_service)):
    """List every resident."""
    return service.get_all()


@router.get("/persons/person", response_model=Person)
def get_person(
    first_name: str = Query(alias="firstName", min_length=1, pattern=NON_BLANK),
    last_name: str = Query(alias="lastName", min_length=1, pattern=NON_BLANK),
    service: PersonService = Depends(get_person_service),
):
    """Get a single resident by name."""
    return service.get(first_name, last_name)


@router.post("/person", response_model=Person, status_code=201)
def create_person(
    body: Person,
    response: Response,
    service: PersonService = Depends(get_person_service),
):
    """Create a resident. 409 when the name is already taken."""
    created = service.add(body)
    query = urlencode({"firstName": created.first_name, "lastName": created.last_name})
    response.headers["Location"] = f"/persons/person?{query}"
    return created


@router.put("/person", response_model=Person)
def update_person(body: Person, service: PersonService = Depends(get_person_service)):
    """Replace every field of the resident with that name."""
    return service.update(body)


@router.delete("/person", status_code=204)
def delete_person(
    first_name: str = Query(alias="firstName", min_length=1, pattern=NON_BLANK),
    last_name: str = Query(alias="lastName", min_length=1, pattern=NON_BLANK),
    service: PersonService = Depends(get_person_service),
):
    """Delete a resident."""
    service.delete(first_name, last_name)

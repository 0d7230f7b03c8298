"""
Pytest Configuration and Fixtures.

Provides a small fixed data set, a store loaded with it, the query engine
pinned to a fixed reference date, and an async HTTP client over the app.

Reference date 2026-01-15 gives these ages:
  John Boyd 41, Tenley Boyd 13, Peter Duncan 25, Eric Cadigan 80,
  Lily Cooper 31. Felicia Boyd has no medical record.
"""

import copy
from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from safetynet.db.store import RecordStore
from safetynet.engine.alerts import AlertQueryEngine
from safetynet.main import create_app
from safetynet.services.loader import load_document

REFERENCE_DATE = date(2026, 1, 15)

SAMPLE_DOCUMENT = {
    "persons": [
        {"firstName": "John", "lastName": "Boyd", "address": "1509 Culver St", "city": "Culver",
         "zip": "97451", "phone": "841-874-6512", "email": "jaboyd@email.com"},
        {"firstName": "Tenley", "lastName": "Boyd", "address": "1509 Culver St", "city": "Culver",
         "zip": "97451", "phone": "841-874-6512", "email": "tenz@email.com"},
        {"firstName": "Felicia", "lastName": "Boyd", "address": "1509 Culver St", "city": "Culver",
         "zip": "97451", "phone": "841-874-6544", "email": "jaboyd@email.com"},
        {"firstName": "Peter", "lastName": "Duncan", "address": "644 Gershwin Cir", "city": "Culver",
         "zip": "97451", "phone": "841-874-6512", "email": "jaboyd@email.com"},
        {"firstName": "Eric", "lastName": "Cadigan", "address": "951 LoneTree Rd", "city": "Culver",
         "zip": "97451", "phone": "841-874-7458", "email": "gramps@email.com"},
        {"firstName": "Lily", "lastName": "Cooper", "address": "489 Manchester St", "city": "Springfield",
         "zip": "97452", "phone": "841-874-9845", "email": "lily@email.com"},
    ],
    "firestations": [
        {"address": "1509 Culver St", "station": "3"},
        {"address": "644 Gershwin Cir", "station": "1"},
        {"address": "951 LoneTree Rd", "station": "2"},
        {"address": "29 15th St", "station": "2"},
        {"address": "489 Manchester St", "station": "4"},
    ],
    "medicalrecords": [
        {"firstName": "John", "lastName": "Boyd", "birthdate": "03/06/1984",
         "medications": ["aznol:350mg", "hydrapermazol:100mg"], "allergies": ["nillacilan"]},
        {"firstName": "Tenley", "lastName": "Boyd", "birthdate": "02/18/2012",
         "medications": [], "allergies": ["peanut"]},
        {"firstName": "Peter", "lastName": "Duncan", "birthdate": "09/06/2000",
         "medications": [], "allergies": ["shellfish"]},
        {"firstName": "Eric", "lastName": "Cadigan", "birthdate": "08/06/1945",
         "medications": ["tradoxidine:400mg"], "allergies": []},
        {"firstName": "Lily", "lastName": "Cooper", "birthdate": "03/06/1994",
         "medications": [], "allergies": []},
    ],
}


def fixed_clock() -> date:
    return REFERENCE_DATE


@pytest.fixture
def sample_document() -> dict:
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def store(sample_document) -> RecordStore:
    """Record store loaded with the sample data set."""
    record_store = RecordStore()
    load_document(record_store, sample_document, source="sample")
    return record_store


@pytest.fixture
def engine(store) -> AlertQueryEngine:
    return AlertQueryEngine(store, clock=fixed_clock)


@pytest.fixture
def app(store):
    return create_app(store=store, clock=fixed_clock)


@pytest_asyncio.fixture
async def client(app):
    """Async test client over the app, sharing the store fixture."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

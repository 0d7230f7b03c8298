"""
Alert Query Endpoints.

GET /communityEmail?city=                       — resident e-mails of a city
GET /phoneAlert?firestation=                    — phone numbers covered by a station
GET /personInfo?firstName=&lastName=            — full view of a resident
GET /childAlert?address=                        — minors at an address + household
GET /fire?address=                              — residents at an address + station
GET /flood/stations?stations=1&stations=2       — households of several stations
GET /firestation?stationNumber=                 — station coverage with head counts

Handlers are plain functions: FastAPI runs them on its worker thread pool
and the record store serializes access per collection.
"""

import structlog
from fastapi import APIRouter, Depends, Query

from safetynet.api.deps import NON_BLANK, get_alert_engine
from safetynet.engine.alerts import AlertQueryEngine
from safetynet.schemas.alerts import ChildAlert, FireAlert, PersonView, StationCoverage

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["alerts"])


@router.get("/communityEmail", response_model=list[str])
def community_email(
    city: str = Query(min_length=1, pattern=NON_BLANK),
    engine: AlertQueryEngine = Depends(get_alert_engine),
):
    """E-mail addresses of every resident of the city, without duplicates."""
    logger.info("community_email_requested", city=city)
    return engine.community_email(city)


@router.get("/phoneAlert", response_model=list[str])
def phone_alert(
    firestation: int = Query(ge=1),
    engine: AlertQueryEngine = Depends(get_alert_engine),
):
    """Phone numbers of residents covered by the station, without duplicates."""
    logger.info("phone_alert_requested", station=firestation)
    return engine.phone_alert(firestation)


@router.get(
    "/personInfo",
    response_model=list[PersonView],
    response_model_exclude_none=True,
)
def person_info(
    first_name: str = Query(alias="firstName", min_length=1, pattern=NON_BLANK),
    last_name: str = Query(alias="lastName", min_length=1, pattern=NON_BLANK),
    engine: AlertQueryEngine = Depends(get_alert_engine),
):
    """Address, e-mail, age and medical data of the named resident."""
    logger.info("person_info_requested", first_name=first_name, last_name=last_name)
    return engine.person_info(first_name, last_name)


@router.get("/childAlert", response_model=ChildAlert, response_model_exclude_none=True)
def child_alert(
    address: str = Query(min_length=1, pattern=NON_BLANK),
    engine: AlertQueryEngine = Depends(get_alert_engine),
):
    """
    Children (age <= 18) living at the address with their ages, plus the
    other household members. Empty children list when no minor lives there.
    """
    logger.info("child_alert_requested", address=address)
    return engine.child_alert(address)


@router.get("/fire", response_model=FireAlert, response_model_exclude_none=True)
def fire_alert(
    address: str = Query(min_length=1, pattern=NON_BLANK),
    engine: AlertQueryEngine = Depends(get_alert_engine),
):
    """Residents at the address with medical data, and the covering station."""
    logger.info("fire_alert_requested", address=address)
    return engine.fire_alert(address)


@router.get(
    "/flood/stations",
    response_model=dict[str, list[PersonView]],
    response_model_exclude_none=True,
)
def flood_households(
    stations: list[int] = Query(min_length=1),
    engine: AlertQueryEngine = Depends(get_alert_engine),
):
    """Households covered by the stations, grouped by address."""
    logger.info("flood_households_requested", stations=stations)
    return engine.flood_households(stations)


@router.get("/firestation", response_model=StationCoverage, response_model_exclude_none=True)
def station_coverage(
    station_number: int = Query(alias="stationNumber", ge=1),
    engine: AlertQueryEngine = Depends(get_alert_engine),
):
    """Residents covered by the station with children/adult counts."""
    logger.info("station_coverage_requested", station=station_number)
    return engine.station_coverage(station_number)

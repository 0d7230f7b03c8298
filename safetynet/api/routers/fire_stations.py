"""
Fire station mapping CRUD endpoints.

GET    /fireStations                          — list every mapping
GET    /fireStations/fireStation?address=     — mapping of an address
GET    /fireStations/{station}                — mappings of a station
POST   /fireStation                           — create a mapping
PUT    /fireStation                           — move an address to another station
DELETE /fireStation?address=                  — delete the mapping of an address
DELETE /fireStations/{station}                — delete every mapping of a station
"""

from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Path, Query, Response

from safetynet.api.deps import NON_BLANK, get_fire_station_service
from safetynet.schemas.fire_station import FireStation
from safetynet.services.fire_station_service import FireStationService

router = APIRouter(tags=["fire-stations"])


@router.get("/fireStations", response_model=list[FireStation])
def list_fire_stations(service: FireStationService = Depends(get_fire_station_service)):
    return service.get_all()


# Declared before /fireStations/{station} so the literal path wins
@router.get("/fireStations/fireStation", response_model=FireStation)
def get_fire_station_by_address(
    address: str = Query(min_length=1, pattern=NON_BLANK),
    service: FireStationService = Depends(get_fire_station_service),
):
    return service.get_by_address(address)


@router.get("/fireStations/{station}", response_model=list[FireStation])
def get_fire_stations_by_station(
    station: int = Path(ge=1),
    service: FireStationService = Depends(get_fire_station_service),
):
    return service.get_by_station(station)


@router.post("/fireStation", response_model=FireStation, status_code=201)
def create_fire_station(
    body: FireStation,
    response: Response,
    service: FireStationService = Depends(get_fire_station_service),
):
    """Create a mapping. 409 when the address is already mapped."""
    created = service.add(body)
    response.headers["Location"] = (
        f"/fireStations/fireStation?{urlencode({'address': created.address})}"
    )
    return created


@router.put("/fireStation", response_model=FireStation)
def update_fire_station(
    body: FireStation,
    service: FireStationService = Depends(get_fire_station_service),
):
    return service.update(body)


@router.delete("/fireStation", status_code=204)
def delete_fire_station_by_address(
    address: str = Query(min_length=1, pattern=NON_BLANK),
    service: FireStationService = Depends(get_fire_station_service),
):
    service.delete_by_address(address)


@router.delete("/fireStations/{station}", status_code=204)
def delete_fire_stations_by_station(
    station: int = Path(ge=1),
    service: FireStationService = Depends(get_fire_station_service),
):
    """Delete every mapping of the station, or none when it has no mapping."""
    service.delete_by_station(station)

"""
Fire station mapping CRUD service.

An address maps to at most one station, so the address is the key for
add/update/delete. Deleting by station removes every mapping of that
station in a single write: either all of them go or, when the station has
no mapping, none.
"""

import structlog

from safetynet.db.store import RecordStore
from safetynet.errors import NotFoundError
from safetynet.schemas.fire_station import FireStation

logger = structlog.get_logger(__name__)


class FireStationService:
    def __init__(self, store: RecordStore):
        self.mappings = store.fire_stations

    def get_all(self) -> list[FireStation]:
        return self.mappings.all()

    def get_by_station(self, station: int) -> list[FireStation]:
        mappings = self.mappings.by_station(station)
        if not mappings:
            raise NotFoundError("Addresses mapped to station", station)
        return mappings

    def get_by_address(self, address: str) -> FireStation:
        mapping = self.mappings.by_address(address)
        if mapping is None:
            raise NotFoundError("Fire station mapping", address)
        return mapping

    def add(self, mapping: FireStation) -> FireStation:
        self.mappings.add(mapping)
        logger.info("fire_station_mapping_added", address=mapping.address, station=mapping.station)
        return self.get_by_address(mapping.address)

    def update(self, mapping: FireStation) -> FireStation:
        self.mappings.update(mapping)
        logger.info("fire_station_mapping_updated", address=mapping.address, station=mapping.station)
        return self.get_by_address(mapping.address)

    def delete_by_address(self, address: str) -> FireStation:
        removed = self.mappings.delete(address)
        logger.info("fire_station_mapping_deleted", address=address, station=removed.station)
        return removed

    def delete_by_station(self, station: int) -> list[FireStation]:
        removed = self.mappings.delete_by_station(station)
        logger.info("fire_station_mappings_deleted", station=station, n_deleted=len(removed))
        return removed

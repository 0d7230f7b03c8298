"""
Alert Query Engine.

Read-only projections joining residents, fire station mappings and medical
records:
- community_email:    resident e-mails of a city
- phone_alert:        resident phone numbers covered by a station
- person_info:        full view of a named resident
- station_coverage:   residents of a station with minor/adult counts
- child_alert:        minors at an address and their household
- fire_alert:         residents at an address and their station
- flood_households:   residents of several stations grouped by address

Each collection is read through its own snapshot. An InvalidDateError from
any resident aborts the whole query.
"""

from datetime import date
from typing import Callable, Iterable, Optional

import structlog

from safetynet.db.store import RecordStore
from safetynet.engine.age import is_minor
from safetynet.engine.views import ViewKind, build_view
from safetynet.errors import NotFoundError
from safetynet.schemas.alerts import ChildAlert, FireAlert, PersonView, StationCoverage
from safetynet.schemas.medical_record import MedicalRecord
from safetynet.schemas.person import Person, PersonKey

logger = structlog.get_logger(__name__)


def distinct_non_blank(values: Iterable[Optional[str]]) -> list[str]:
    """Drop None/blank values and duplicates, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if value is None or not value.strip() or value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


class AlertQueryEngine:
    """
    Answers the emergency alert queries over a RecordStore.

    clock supplies the reference date for age computation; tests inject a
    fixed date.
    """

    def __init__(self, store: RecordStore, clock: Callable[[], date] = date.today):
        self.store = store
        self.clock = clock

    # ── Queries ───────────────────────────────────────────────────────────

    def community_email(self, city: str) -> list[str]:
        emails = distinct_non_blank(p.email for p in self.store.persons.by_city(city))
        if not emails:
            raise NotFoundError("Community emails for city", city)
        logger.debug("community_email_resolved", city=city, n_emails=len(emails))
        return emails

    def phone_alert(self, station: int) -> list[str]:
        addresses = self._station_addresses(station)
        grouped = self.store.persons.by_addresses(addresses)
        return distinct_non_blank(
            person.phone for residents in grouped.values() for person in residents
        )

    def person_info(self, first_name: str, last_name: str) -> list[PersonView]:
        person = self.store.persons.get((first_name, last_name))
        if person is None:
            raise NotFoundError("Person", f"{first_name} {last_name}")
        record = self.store.medical_records.get(person.key)
        return [build_view(person, record, ViewKind.PERSON_INFO, self.clock())]

    def station_coverage(self, station: int) -> StationCoverage:
        addresses = self._station_addresses(station)
        grouped = self.store.persons.by_addresses(addresses)
        residents = [person for group in grouped.values() for person in group]
        records = self._records_for(residents)
        today = self.clock()

        children = adults = undetermined = 0
        views: list[PersonView] = []
        for person in residents:
            record = records.get(person.key)
            if record is None:
                undetermined += 1
            elif is_minor(record.birthdate, today):
                children += 1
            else:
                adults += 1
            views.append(build_view(person, record, ViewKind.STATION_COVERAGE, today))

        logger.debug(
            "station_coverage_resolved",
            station=station,
            n_residents=len(views),
            children=children,
            adults=adults,
            undetermined=undetermined,
        )
        return StationCoverage(
            residents=views,
            children_count=children,
            adult_count=adults,
            undetermined_age_count=undetermined or None,
        )

    def child_alert(self, address: str) -> ChildAlert:
        residents = self.store.persons.by_address(address)
        if not residents:
            raise NotFoundError("Residents at address", address)
        records = self._records_for(residents)
        today = self.clock()

        children: list[PersonView] = []
        household: list[PersonView] = []
        for person in residents:
            record = records.get(person.key)
            if record is not None and is_minor(record.birthdate, today):
                children.append(build_view(person, record, ViewKind.AGE, today))
            else:
                household.append(build_view(person, record, ViewKind.NAME, today))

        return ChildAlert(children=children, household_members=household)

    def fire_alert(self, address: str) -> FireAlert:
        mapping = self.store.fire_stations.by_address(address)
        if mapping is None:
            raise NotFoundError("Fire station mapping", address)
        residents = self.store.persons.by_address(address)
        return FireAlert(
            residents=self._alert_views(residents),
            station=mapping.station,
        )

    def flood_households(self, stations: Iterable[int]) -> dict[str, list[PersonView]]:
        """
        Residents of every address covered by the stations, grouped by address.

        Unmapped stations are skipped; addresses without residents are omitted.
        """
        addresses: list[str] = []
        for station in dict.fromkeys(stations):
            mappings = self.store.fire_stations.by_station(station)
            if not mappings:
                logger.debug("flood_station_unmapped", station=station)
                continue
            addresses.extend(m.address for m in mappings)

        grouped = self.store.persons.by_addresses(addresses)
        residents = [person for group in grouped.values() for person in group]
        records = self._records_for(residents)
        today = self.clock()

        return {
            address: [
                build_view(person, records.get(person.key), ViewKind.ALERT, today)
                for person in group
            ]
            for address, group in grouped.items()
            if group
        }

    # ── Helpers ───────────────────────────────────────────────────────────

    def _station_addresses(self, station: int) -> list[str]:
        mappings = self.store.fire_stations.by_station(station)
        if not mappings:
            raise NotFoundError("Addresses mapped to station", station)
        return [m.address for m in mappings]

    def _records_for(self, residents: list[Person]) -> dict[PersonKey, MedicalRecord]:
        return self.store.medical_records.by_names(p.key for p in residents)

    def _alert_views(self, residents: list[Person]) -> list[PersonView]:
        records = self._records_for(residents)
        today = self.clock()
        return [build_view(p, records.get(p.key), ViewKind.ALERT, today) for p in residents]

"""
Age Resolver.

Whole years elapsed between a birthdate and a reference date. A resident is
a minor up to and including age 18.
"""

from datetime import date
from typing import Optional

from safetynet.errors import InvalidDateError

MINOR_MAX_AGE: int = 18


def compute_age(birthdate: date, reference_date: Optional[date] = None) -> int:
    """
    Whole years from birthdate to reference_date (default: today).

    A Feb 29 birthday is reached on Mar 1 in non-leap years.
    Raises InvalidDateError when birthdate is after reference_date.
    """
    if reference_date is None:
        reference_date = date.today()
    if birthdate > reference_date:
        raise InvalidDateError(birthdate, reference_date)

    years = reference_date.year - birthdate.year
    if (reference_date.month, reference_date.day) < (birthdate.month, birthdate.day):
        years -= 1
    return years


def is_minor(birthdate: date, reference_date: Optional[date] = None) -> bool:
    return compute_age(birthdate, reference_date) <= MINOR_MAX_AGE

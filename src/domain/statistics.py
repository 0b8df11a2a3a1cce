"""Registration statistics derived from a full store scan."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from .ports import RegistrationRecord


@dataclass(frozen=True)
class RegistrationStats:
    """Aggregate counts over every stored registration."""

    total_registrations: int = 0
    countries: list[str] = field(default_factory=list)
    grades: dict[int, int] = field(default_factory=dict)


def summarize(records: Iterable[RegistrationRecord]) -> RegistrationStats:
    """
    Count registrations, distinct countries, and registrations per grade.

    Countries are returned sorted; grades are keyed by grade number.
    """
    total = 0
    countries: set[str] = set()
    grades: Counter[int] = Counter()
    for record in records:
        total += 1
        if record.country:
            countries.add(record.country)
        grades[record.grade] += 1

    return RegistrationStats(
        total_registrations=total,
        countries=sorted(countries),
        grades=dict(sorted(grades.items())),
    )

from datetime import datetime
from typing import Optional

from dateutil.relativedelta import relativedelta

from .bdayleft_env import BdayleftConfig, DEFAULT_CONFIG
from .errors import ParseError, ReferenceBeforeBirthError
from .person import Person
from .shared import (
    NOW,
    localize,
    log_msg,
    parse_reference,
    remaining_in_words,
    start_of_day,
)


class BirthdayCalculator:
    """
    Age, birthday window and time remaining for a person at a reference
    instant.

    The birthday window is the civil day of the anniversary in the
    person's timezone, [window_start, window_end). All arithmetic is
    wall-clock calendar arithmetic in that timezone, so years, months and
    days follow the calendar rather than fixed lengths.

    When the reference falls inside the window, ``remaining`` runs to
    ``window_end``; otherwise it runs to ``next_window_start``.
    """

    def __init__(self, person: Person, reference: datetime):
        self.person = person
        zone = person.zone
        self.reference = localize(reference, zone)
        birth = localize(person.birth_date, zone)

        if self.reference < birth:
            raise ReferenceBeforeBirthError(
                f"Reference time {self.reference.isoformat()} is before "
                f"{person.name}'s birth at {birth.isoformat()}"
            )

        # count anniversaries from midnight so the whole birth day counts
        birth_day = birth.replace(hour=0, minute=0, second=0, microsecond=0)
        self.age = relativedelta(self.reference, birth_day).years
        self.next_age = self.age + 1

        try:
            anniversary = birth_day + relativedelta(years=self.age)
            self.window_start = start_of_day(anniversary)
            self.window_end = start_of_day(anniversary + relativedelta(days=1))
            self.next_window_start = start_of_day(
                birth_day + relativedelta(years=self.next_age)
            )
        except (ValueError, OverflowError) as exc:
            raise ParseError(
                f"Reference time {self.reference.isoformat()} is too close to "
                f"the end of the calendar: {exc}"
            ) from exc

        self.is_birthday = self.reference < self.window_end
        self.boundary = self.window_end if self.is_birthday else self.next_window_start
        self.remaining = relativedelta(self.boundary, self.reference)

        log_msg(
            f"{self.reference.isoformat()}: age {self.age}, window "
            f"{self.window_start.isoformat()} - {self.window_end.isoformat()}, "
            f"birthday={self.is_birthday}, remaining {self.remaining}"
        )

    @classmethod
    def create(
        cls,
        person: Person,
        reference_time: Optional[str] = NOW,
        config: Optional[BdayleftConfig] = None,
    ) -> "BirthdayCalculator":
        """Parse ``reference_time`` ('now' by default) and compute."""
        reference = parse_reference(reference_time, person.zone, config or DEFAULT_CONFIG)
        return cls(person, reference)

    def remaining_text(self) -> str:
        return remaining_in_words(self.remaining)

    def pretty(self) -> str:
        if self.is_birthday:
            return (
                f"{self.person.name} is {self.age} years old today "
                f"({self.remaining_text()} remaining in {self.person.time_zone})"
            )
        return (
            f"{self.person.name} is {self.next_age} years old in "
            f"{self.remaining_text()} in {self.person.time_zone}"
        )

    def __repr__(self) -> str:
        return (
            f"BirthdayCalculator(name={self.person.name!r}, "
            f"reference={self.reference.isoformat()!r}, age={self.age}, "
            f"is_birthday={self.is_birthday})"
        )

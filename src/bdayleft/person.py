from datetime import datetime, tzinfo
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from .bdayleft_env import BdayleftConfig, DEFAULT_CONFIG
from .errors import ParseError
from .shared import localize, log_msg, parse_datetime, resolve_zone


def _first_error(exc: ValidationError) -> str:
    """Return the message of the first failing field without pydantic's prefix."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    cause = (first.get("ctx") or {}).get("error")
    if cause is not None:
        return str(cause)
    return first["msg"]


class Person(BaseModel):
    """
    A name, the moment of birth and the IANA timezone the birth date is
    interpreted in. Instances are immutable; use ``Person.create`` to build
    one from raw command line strings.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    # time_zone is declared before birth_date so the birth date validator
    # can see the resolved zone
    time_zone: str
    birth_date: datetime

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name must not be empty")
        return value

    @field_validator("time_zone")
    @classmethod
    def _zone_resolves(cls, value: str) -> str:
        resolve_zone(value)
        return value.strip()

    @field_validator("birth_date", mode="before")
    @classmethod
    def _parse_birth_date(cls, value, info: ValidationInfo):
        zone_name = info.data.get("time_zone")
        if zone_name is None:
            raise ValueError("Birth date requires a valid timezone")
        zone = resolve_zone(zone_name)
        if isinstance(value, str):
            config = (info.context or {}).get("config", DEFAULT_CONFIG)
            return parse_datetime(value, zone, config)
        if isinstance(value, datetime):
            return localize(value, zone)
        return value

    @property
    def zone(self) -> tzinfo:
        return resolve_zone(self.time_zone)

    @classmethod
    def create(
        cls,
        name: str,
        birth_date: str,
        time_zone: str,
        config: Optional[BdayleftConfig] = None,
    ) -> "Person":
        """
        Build a Person from raw strings. Any parse or timezone failure
        raises ParseError with a readable cause; nothing partial is returned.
        """
        try:
            person = cls.model_validate(
                {"name": name, "time_zone": time_zone, "birth_date": birth_date},
                context={"config": config or DEFAULT_CONFIG},
            )
        except ValidationError as exc:
            raise ParseError(_first_error(exc)) from exc
        log_msg(f"{person.name}: born {person.birth_date.isoformat()} ({person.time_zone})")
        return person

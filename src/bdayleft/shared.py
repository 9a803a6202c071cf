import inspect
import textwrap
import shutil
from datetime import datetime, tzinfo
from dateutil import tz
from dateutil.parser import parse as dateutil_parse
from dateutil.parser import ParserError
from dateutil.relativedelta import relativedelta
from rich.console import Console

from .bdayleft_env import BdayleftConfig, DEFAULT_CONFIG
from .errors import ParseError

NOW = "now"

# unit names are fixed plurals: "1 days", "1 minutes"
DATE_UNITS = ("years", "months", "days")
TIME_UNITS = ("hours", "minutes")

_verbose = False


def set_verbose(flag: bool) -> None:
    global _verbose
    _verbose = bool(flag)


def resolve_zone(name: str) -> tzinfo:
    """
    Return the tzinfo for an IANA name such as 'America/New_York'.
    dateutil's gettz caches instances, so the same name always yields the
    same object and datetimes built from it compare by wall clock.
    """
    if not name or not name.strip():
        raise ParseError("Unknown timezone: timezone must not be empty")
    try:
        zone = tz.gettz(name.strip())
    except ValueError as exc:
        raise ParseError(f"Unknown timezone: {name!r}") from exc
    # gettz also builds zones from POSIX TZ strings such as "Foo3"
    if zone is None or isinstance(zone, tz.tzstr):
        raise ParseError(f"Unknown timezone: {name!r}")
    return zone


def localize(dt: datetime, zone: tzinfo) -> datetime:
    """
    Attach zone to naive dt, moving wall times lost to a DST gap forward;
    convert aware dt into zone.
    """
    if dt.tzinfo is None:
        return tz.resolve_imaginary(dt.replace(tzinfo=zone))
    return dt.astimezone(zone)


def parse_datetime(
    s: str, zone: tzinfo, config: BdayleftConfig = DEFAULT_CONFIG
) -> datetime:
    """
    Parse free-form date/datetime text with dateutil using the configured
    ordering rules. A date without a time of day means midnight. Text
    without an offset is wall-clock time in ``zone``; text with an offset
    is converted into ``zone``.
    """
    text = (s or "").strip()
    if not text:
        raise ParseError("String does not contain a date: empty string")
    try:
        dt = dateutil_parse(text, parserinfo=config.parser_info())
        return localize(dt, zone)
    except (ParserError, OverflowError) as exc:
        raise ParseError(str(exc)) from exc


def parse_reference(
    s: str | None, zone: tzinfo, config: BdayleftConfig = DEFAULT_CONFIG
) -> datetime:
    if s is None or s.strip().lower() == NOW:
        return datetime.now(zone)
    return parse_datetime(s, zone, config)


def start_of_day(dt: datetime) -> datetime:
    """
    Midnight of the civil day containing dt. When a DST gap swallows
    midnight the first existing wall time after it is returned.
    """
    midnight = dt.replace(hour=0, minute=0, second=0, microsecond=0)
    if midnight.tzinfo is None:
        return midnight
    return tz.resolve_imaginary(midnight)


def remaining_in_words(delta: relativedelta) -> str:
    """
    Render a calendar diff as '2 months, 3 days' or '5 hours, 12 minutes'.
    Sub-day units are dropped as soon as a day-or-larger unit is shown and
    seconds are never shown.
    """
    parts = [
        f"{getattr(delta, name)} {name}" for name in DATE_UNITS if getattr(delta, name)
    ]
    if not parts:
        parts = [
            f"{getattr(delta, name)} {name}"
            for name in TIME_UNITS
            if getattr(delta, name)
        ]
    if not parts:
        return "0 minutes"
    return ", ".join(parts)


def log_msg(msg: str):
    """
    Write a diagnostic message to stderr when verbose output is on.

    Args:
        msg (str): The message to log.
    """
    if not _verbose:
        return

    frame = inspect.stack()[1].frame
    func_name = frame.f_code.co_name

    # Default: just function name
    caller_name = func_name

    # Detect instance/class/static context
    if "self" in frame.f_locals:  # instance method
        cls_name = frame.f_locals["self"].__class__.__name__
        caller_name = f"{cls_name}.{func_name}"
    elif "cls" in frame.f_locals:  # classmethod
        cls_name = frame.f_locals["cls"].__name__
        caller_name = f"{cls_name}.{func_name}"

    lines = [
        f"- {datetime.now().strftime('%H:%M:%S')} log_msg ({caller_name}):",
    ]
    lines.extend(
        textwrap.wrap(
            msg.strip(),
            width=max(20, shutil.get_terminal_size()[0] - 6),
            initial_indent="   ",
            subsequent_indent="   ",
        )
    )

    console = Console(stderr=True, highlight=False, markup=False, emoji=False)
    console.print("\n".join(lines), style="dim", soft_wrap=True)

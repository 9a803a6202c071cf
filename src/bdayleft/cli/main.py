import click
from rich.console import Console

from bdayleft import __version__
from bdayleft.bdayleft_env import BdayleftConfig
from bdayleft.calculator import BirthdayCalculator
from bdayleft.errors import ParseError
from bdayleft.person import Person
from bdayleft.shared import NOW, log_msg, set_verbose

VERSION = __version__

EXIT_USAGE = 1
EXIT_PARSE = 2


def _stdout() -> Console:
    return Console(highlight=False, markup=False, emoji=False, soft_wrap=True)


def _stderr() -> Console:
    return Console(
        stderr=True, highlight=False, markup=False, emoji=False, soft_wrap=True
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(
    VERSION, prog_name="bdayleft", message="%(prog)s version %(version)s"
)
@click.argument("name", required=False, metavar="NAME")
@click.argument("birthdate", required=False, metavar="BIRTHDATE")
@click.argument("timezone", required=False, metavar="TIMEZONE")
@click.argument("reftime", required=False, default=NOW, metavar="[REFTIME]")
@click.option(
    "--dayfirst/--monthfirst",
    default=False,
    help="Read ambiguous dates such as 01/02/03 day first.",
)
@click.option(
    "--yearfirst/--no-yearfirst",
    default=True,
    help="Read ambiguous dates such as 01/02/03 year first.",
)
@click.option("--verbose", "-v", is_flag=True, help="Print diagnostics to stderr.")
@click.pass_context
def cli(ctx, name, birthdate, timezone, reftime, dayfirst, yearfirst, verbose):
    """
    Show how long until NAME's next birthday, or how much of today's
    birthday is left.

    BIRTHDATE and REFTIME accept most date formats, e.g. 1990-06-15 or
    "June 15 1990 08:30". TIMEZONE is an IANA name such as
    America/New_York. REFTIME defaults to now.

    Examples:
      bdayleft Alice 1990-06-15 America/New_York
      bdayleft Alice 1990-06-15 America/New_York "2024-06-15 10:00"
    """
    if timezone is None:
        _stderr().print(ctx.get_usage())
        _stderr().print(f"Try '{ctx.command_path} --help' for help.")
        ctx.exit(EXIT_USAGE)

    config = BdayleftConfig.model_validate(
        {"dayfirst": dayfirst, "yearfirst": yearfirst, "verbose": verbose}
    )
    set_verbose(config.verbose)
    log_msg(f"bdayleft version: {VERSION}")

    try:
        person = Person.create(name, birthdate, timezone, config)
        calculator = BirthdayCalculator.create(person, reftime, config)
    except ParseError as e:
        _stderr().print(str(e), style="red")
        ctx.exit(EXIT_PARSE)

    _stdout().print(calculator.pretty())

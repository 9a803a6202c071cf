class BdayleftError(ValueError):
    pass


class ParseError(BdayleftError):
    """
    A birthdate, timezone or reference time could not be parsed or
    resolved. The message is the human-readable cause and is shown
    to the user as-is.
    """


class ReferenceBeforeBirthError(ParseError):
    pass

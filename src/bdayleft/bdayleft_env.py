from pydantic import BaseModel
from dateutil.parser import parserinfo


# ─── Config Schema ─────────────────────────────────────────────────
class BdayleftConfig(BaseModel):
    # dateutil ordering rules for ambiguous dates such as 01/02/03
    dayfirst: bool = False
    yearfirst: bool = True
    verbose: bool = False

    def parser_info(self) -> parserinfo:
        return parserinfo(dayfirst=self.dayfirst, yearfirst=self.yearfirst)


DEFAULT_CONFIG = BdayleftConfig()

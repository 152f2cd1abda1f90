"""Response envelope of the Jolpica-F1 / Ergast API."""

from pydantic import BaseModel, Field

from f1countdown.schemas.race import Race


class RaceTable(BaseModel):
    """Race table containing season info and races."""

    season: str | None = None
    round: str | None = None
    races: list[Race] = Field(..., alias="Races")


class MRData(BaseModel):
    """Main data container."""

    xmlns: str | None = None
    series: str
    url: str
    limit: str
    offset: str
    total: str
    race_table: RaceTable | None = Field(None, alias="RaceTable")


class APIResponse(BaseModel):
    """Root response wrapper."""

    mr_data: MRData = Field(..., alias="MRData")

    @property
    def races(self) -> list[Race]:
        if self.mr_data.race_table is None:
            return []
        return self.mr_data.race_table.races

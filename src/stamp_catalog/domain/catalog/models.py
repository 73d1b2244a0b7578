"""Stamp catalog domain - Models.

``Stamp`` and ``Query`` are immutable records built once during ingestion.
"""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from stamp_catalog.domain.catalog.constants import OUTPUT_SEPARATOR


class Stamp(BaseModel):
    """One catalog entry.

    ``price_text`` keeps the price exactly as written in the input and is what
    gets printed; ``price`` is its numeric value and takes no part in ordering.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    year: int = Field(..., description="Issue year")
    post_office: str = Field(..., description="Whitespace-normalized post office")
    price: float = Field(..., description="Numeric price value")
    name: str = Field(..., description="Whitespace-normalized stamp name")
    price_text: str = Field(..., description="Price as written in the input")

    @field_validator("price")
    @classmethod
    def price_must_be_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"price must be finite, got {v}")
        return v

    def format_line(self) -> str:
        """Render the output line: year, post office, original price text, name."""
        return OUTPUT_SEPARATOR.join(
            (str(self.year), self.post_office, self.price_text, self.name)
        )


class Query(BaseModel):
    """Inclusive year range lookup."""

    model_config = ConfigDict(frozen=True, strict=True)

    begin_year: int = Field(..., description="First year of the range (inclusive)")
    end_year: int = Field(..., description="Last year of the range (inclusive)")

    @model_validator(mode="after")
    def check_date_range(self) -> "Query":
        if self.begin_year > self.end_year:
            raise ValueError(
                f"begin_year {self.begin_year} is greater than end_year {self.end_year}"
            )
        return self

    def contains(self, year: int) -> bool:
        return self.begin_year <= year <= self.end_year


__all__ = ["Stamp", "Query"]

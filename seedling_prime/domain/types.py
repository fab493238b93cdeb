"""Annotated types shared by the domain models."""

from typing import Annotated

from pydantic import AfterValidator, Field

# Ticker symbol, trimmed and uppercased (e.g. "AAPL", "BRK.B")
Symbol = Annotated[
    str,
    Field(min_length=1, max_length=20, examples=["AAPL", "MSFT"]),
    AfterValidator(lambda v: v.strip().upper()),
]

# Strictly positive price
PositivePrice = Annotated[float, Field(gt=0)]

# Volume spike multiplier (e.g. 2.0 = twice the average)
VolumeMultiplier = Annotated[float, Field(gt=0)]

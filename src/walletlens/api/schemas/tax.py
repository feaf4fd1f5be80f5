"""Pydantic schemas for tax API."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from walletlens.domain.models.defi import ProtocolPosition
from walletlens.domain.models.settings import TaxSettings
from walletlens.domain.models.tax import TaxEvent


class TaxReportRequest(BaseModel):
    events: list[TaxEvent]
    positions: list[ProtocolPosition] = []  # Claimed rewards become reward events
    settings: TaxSettings = TaxSettings()
    year: int | None = None  # None = settings.tax_year
    as_of: datetime | None = None


class TaxExportRequest(TaxReportRequest):
    format: Literal["csv", "xlsx"] = "csv"


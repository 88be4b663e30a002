"""
Pydantic models for PDF report generation.
"""

from typing import Optional

from pydantic import BaseModel, Field

from solarjo.models.financial import FinancialViabilityResult


class ReportCard(BaseModel):
    """One calculator result the user added to the report."""
    type: str = Field(..., description="Calculator name, e.g. 'Wire Sizing'")
    summary: str = ""
    values: dict[str, str] = Field(default_factory=dict)


class ReportInput(BaseModel):
    """Input for generating a PDF report."""

    title: str = "Solar PV Design Report"
    project_name: Optional[str] = None
    chart_image_base64: Optional[str] = Field(
        None, description="Base64-encoded PNG image of a production chart"
    )
    cards: list[ReportCard] = Field(
        default_factory=list,
        description="Calculator results collected on the dashboard",
    )
    financial: Optional[FinancialViabilityResult] = Field(
        None, description="Financial viability result for the monthly table"
    )
    notes: Optional[str] = Field(
        None, description="Free-text notes to include in the report"
    )
    include_sections: list[str] = Field(
        default_factory=lambda: ["chart", "cards", "financial", "notes"],
        description="Which sections to include in the report",
    )

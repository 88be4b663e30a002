"""
API route for PDF report generation.
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from solarjo.engine.report_generator import generate_report
from solarjo.models.report import ReportInput

router = APIRouter(prefix="/api/v1", tags=["report"])


@router.post("/report/generate")
async def create_report(body: ReportInput) -> Response:
    """Render the collected calculator results as a downloadable PDF."""
    try:
        pdf_bytes = generate_report(body)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))

    # Header values must be Latin-1
    filename = (body.project_name or body.title).replace('"', "")
    filename = filename.encode("latin-1", "replace").decode("latin-1")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}.pdf"'},
    )

"""
CSV Insight Server - upload, preview, deduplicate and report on CSV files.
FastAPI app; the pipeline itself lives in the sibling modules.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from . import config
from .dashboard import dashboard_summary
from .dataset import Dataset, parse_csv
from .dedup import cleaned_filename, deduplicate_rows
from .errors import CsvInsightError, CsvParseError, EmptyInput, ExternalServiceFailure
from .generators import get_report_generator

logger = logging.getLogger(__name__)

# Session state for the single uploaded dataset (presentation layer only)
app_state: Dict[str, Any] = {
    "dataset": None,
    "dataset_cleaned": None,
    "dataset_name": None,
    "removed_count": 0,
}

# FastAPI app
app = FastAPI(title="CSV Insight Server", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------
# Pydantic Models
# ---------------------

class ReportRequest(BaseModel):
    mode: str = "statistical"  # "statistical" | "ai"
    use_cleaned: bool = True


# ---------------------
# Helper Functions
# ---------------------

def make_response(success: bool, data: Any = None, error: str = None) -> Dict:
    """Standard response format."""
    return {"success": success, "data": data, "error": error}


def reset_state():
    app_state["dataset"] = None
    app_state["dataset_cleaned"] = None
    app_state["dataset_name"] = None
    app_state["removed_count"] = 0


def current_dataset(prefer_cleaned: bool = True) -> Optional[Dataset]:
    """Cleaned dataset when available (and asked for), else the upload."""
    if prefer_cleaned and app_state.get("dataset_cleaned") is not None:
        return app_state["dataset_cleaned"]
    return app_state.get("dataset")


def dataset_payload(dataset: Dataset) -> Dict[str, Any]:
    return {
        "n_rows": dataset.row_count,
        "n_cols": dataset.column_count,
        "columns": list(dataset.columns),
        "preview": dataset.preview(config.PREVIEW_ROWS),
    }


# ---------------------
# API Endpoints
# ---------------------

@app.get("/status")
async def get_status():
    """Health check endpoint."""
    return make_response(True, {
        "status": "online",
        "dataset_loaded": app_state["dataset"] is not None,
        "dataset_name": app_state["dataset_name"],
        "has_cleaned": app_state["dataset_cleaned"] is not None,
    })


@app.post("/ingest")
async def ingest_dataset(file: Optional[UploadFile] = File(None)):
    """Load a CSV upload and return a preview."""
    if file is None:
        return make_response(False, error="No dataset provided")

    filename = file.filename or ""
    if not filename.lower().endswith(".csv"):
        return make_response(
            False,
            error=f'The uploaded file "{filename}" is not a CSV file. Please ensure the file name ends with \'.csv\'.',
        )

    content = await file.read()
    if len(content) > config.MAX_UPLOAD_BYTES:
        return make_response(False, error=f"File too large (limit {config.MAX_UPLOAD_BYTES} bytes)")

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return make_response(False, error="Could not read the file content: not valid UTF-8")

    try:
        dataset = parse_csv(text)
    except (EmptyInput, CsvParseError) as e:
        logger.warning("Rejected upload %s: %s", filename, e)
        return make_response(False, error=str(e))

    # Fresh session for every upload
    reset_state()
    app_state["dataset"] = dataset
    app_state["dataset_name"] = filename
    logger.info("Ingested %s: %d rows x %d columns", filename, dataset.row_count, dataset.column_count)

    return make_response(True, {"dataset_name": filename, **dataset_payload(dataset)})


@app.post("/deduplicate")
async def deduplicate_dataset():
    """Remove duplicate rows from the uploaded dataset."""
    dataset = app_state.get("dataset")
    if dataset is None:
        return make_response(False, error="No dataset loaded. Please upload a CSV file first.")

    result = deduplicate_rows(dataset)
    app_state["dataset_cleaned"] = result.dataset
    app_state["removed_count"] = result.removed_count

    return make_response(True, {
        "original_rows": result.original_rows,
        "removed_count": result.removed_count,
        "cleaned_filename": cleaned_filename(app_state["dataset_name"]),
        **dataset_payload(result.dataset),
    })


@app.get("/download/cleaned")
async def download_cleaned():
    """Download the deduplicated dataset as CSV."""
    dataset = app_state.get("dataset_cleaned")
    if dataset is None:
        return JSONResponse(
            status_code=404,
            content=make_response(False, error="No cleaned dataset available. Please process a file first."),
        )

    filename = cleaned_filename(app_state["dataset_name"])
    return Response(
        content=dataset.to_csv_text(),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/report")
async def generate_report(request: ReportRequest):
    """Statistical (local) or AI-written report for the current dataset."""
    try:
        generator = get_report_generator(request.mode)
    except ValueError as e:
        return make_response(False, error=str(e))

    dataset = current_dataset(prefer_cleaned=request.use_cleaned)
    if dataset is None:
        return make_response(False, error="No dataset loaded. Please upload a CSV file first.")

    try:
        report = await generator.generate(dataset)
    except (EmptyInput, ExternalServiceFailure) as e:
        return make_response(False, error=str(e))
    except CsvInsightError as e:
        logger.exception("Report generation failed")
        return make_response(False, error=str(e))

    logger.info("Generated %s report for %s", generator.name, app_state["dataset_name"])
    return make_response(True, {"mode": generator.name, "report": report.text})


@app.get("/dashboard")
async def get_dashboard():
    """Headline figures for the dashboard."""
    dataset = current_dataset()
    if dataset is None:
        return make_response(False, error="No dataset loaded. Please upload a CSV file first.")
    return make_response(True, dashboard_summary(dataset))


# ---------------------
# Main Entry Point
# ---------------------

def main():
    import sys
    import uvicorn

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    port = int(sys.argv[1]) if len(sys.argv) > 1 else config.SERVER_PORT

    logger.info("Starting CSV Insight server at http://%s:%d", config.SERVER_HOST, port)
    uvicorn.run(app, host=config.SERVER_HOST, port=port)


if __name__ == "__main__":
    main()

"""
HTTP API for health-viz.

  POST /api/health-data   store one raw record
  GET  /api/health-data   return every stored record as-is
  GET  /api/dashboard     series + summary for a window and metric

Run with `health-viz serve`, or `uvicorn health_viz.api.server:create_app --factory`.
"""

from datetime import date
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from health_viz.config import settings
from health_viz.core.chart import configure_chart
from health_viz.core.dashboard import build_dashboard
from health_viz.core.ingest import get_dal, ingest_record, load_raw_records
from health_viz.core.records import InvalidRecord, Metric
from health_viz.core.windows import Window
from health_viz.data_access.dal import DataAccessLayer, PersistenceFailure
from health_viz.infra import log_utils


def create_app(
    dal: Optional[DataAccessLayer] = None,
    today: Callable[[], date] = date.today,
) -> FastAPI:
    """Build the app; chart setup and DAL selection happen here, once."""
    app = FastAPI(title="health-viz")
    app.state.dal = dal or get_dal()
    app.state.chart = configure_chart(settings.CHART_TITLE)
    app.state.today = today
    log_utils.log_message(
        f"[api] App created with {type(app.state.dal).__name__}", "INFO"
    )

    @app.post("/api/health-data")
    async def save_health_data(req: Request):
        try:
            payload = await req.json()
        except ValueError as e:
            return JSONResponse(
                {"message": "Invalid health record.", "error": f"malformed JSON: {e}"},
                status_code=422,
            )

        try:
            record = ingest_record(req.app.state.dal, payload)
        except InvalidRecord as e:
            return JSONResponse(
                {"message": "Invalid health record.", "error": str(e)}, status_code=422
            )
        except PersistenceFailure as e:
            log_utils.log_message(f"[api] Error saving health data: {e}", "ERROR")
            return JSONResponse(
                {"message": "Failed to save health data.", "error": str(e)}, status_code=500
            )
        return {"message": "Health data saved successfully!", "record": record.to_raw()}

    @app.get("/api/health-data")
    def read_health_data(req: Request):
        try:
            return load_raw_records(req.app.state.dal)
        except PersistenceFailure as e:
            log_utils.log_message(f"[api] Error reading health data: {e}", "ERROR")
            return JSONResponse(
                {"message": "Failed to read health data.", "error": str(e)}, status_code=500
            )

    @app.get("/api/dashboard")
    def dashboard(req: Request, window: Optional[Window] = None, metric: Optional[Metric] = None):
        window = window or Window(settings.DEFAULT_WINDOW)
        metric = metric or Metric(settings.DEFAULT_METRIC)
        try:
            raws = load_raw_records(req.app.state.dal)
        except PersistenceFailure as e:
            log_utils.log_message(f"[api] Error reading health data: {e}", "ERROR")
            return JSONResponse(
                {"message": "Failed to read health data.", "error": str(e)}, status_code=500
            )

        view = build_dashboard(raws, window, metric, req.app.state.today())
        body = view.to_dict()
        body["chart"] = req.app.state.chart.payload(view.series)
        return body

    return app

import traceback
import threading
import uuid
from datetime import datetime

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from common.constants import PATHS, SERVER
from common.utils import setup_logging
from recommenders import IdentifierKind, ValidationError
from server.recommendation_service import RecommendationService
from server.reload_state import ReloadStateManager
from server.schemas import RecommendResponse, ReloadResponse, TableStatus

app = FastAPI(title="Recommendation Aggregator API", version="0.1.0")

# Add CORS for local dev
app.add_middleware(
    CORSMiddleware,
    allow_origins=SERVER["cors_origins"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

service = RecommendationService()
reload_state = ReloadStateManager()
logger = setup_logging(__name__, PATHS["app_log_file"])


@app.get("/health")
def health():
    return {
        "status": "ok",
        "recommendations_ready": service.ready,
        "error": service.init_error,
    }


@app.get("/recommendation/status", response_model=TableStatus)
def recommendation_status():
    """Report readiness of the source tables."""
    return service.status()


@app.get("/recommend", response_model=RecommendResponse)
def recommend(identifier: str = "", kind: IdentifierKind = IdentifierKind.USER_BASED):
    """
    Aggregate collaborative, content and Azure ML recommendations.

    kind=user treats the identifier as a user id (collaborative table key),
    kind=content treats it as an item id (content table key).
    """
    try:
        if not service.ready:
            raise HTTPException(
                status_code=503, detail="Recommendation tables are not available. Check the source table paths."
            )

        result = service.recommend(identifier, kind)
        return RecommendResponse(identifier=identifier, kind=kind, **result.to_dict())
    except HTTPException:
        raise
    except ValidationError as e:
        logger.info(f"Rejected /recommend request: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        error_msg = f"{str(e)}\n{traceback.format_exc()}"
        logger.error(f"ERROR in /recommend: {error_msg}")
        raise HTTPException(status_code=500, detail=str(e))


# ===================================================================
# TABLE RELOAD ENDPOINTS
# ===================================================================


@app.get("/tables/reload/status")
def get_reload_status():
    """Status of the most recent table reload."""
    return reload_state.get_status()


def _run_reload_background():
    """Reload both source tables and publish them once complete."""
    try:
        logger.info("Starting table reload...")
        service.reload(on_source_loaded=lambda source: reload_state.mark_source(source, "loaded"))
        reload_state.complete()
        logger.info("✓ Table reload completed")
    except Exception as e:
        logger.error(f"Table reload failed: {str(e)}\n{traceback.format_exc()}")
        reload_state.fail(str(e))


@app.post("/tables/reload", response_model=ReloadResponse)
def start_reload():
    """Start a background reload of the source tables."""
    reload_id = f"reload_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"
    if not reload_state.try_start(reload_id):
        raise HTTPException(status_code=409, detail="Table reload is already running")

    reload_thread = threading.Thread(target=_run_reload_background, daemon=True)
    reload_thread.start()

    logger.info(f"Reload {reload_id} started in background")

    return ReloadResponse(reload_id=reload_id, status="running", message="Reloading source tables...")

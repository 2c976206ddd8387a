"""
MatriCare Report Backend API
============================
Serves patient health reports built from stored medical history, and
accepts newly entered medical data together with an ML risk prediction.

POLICY: the risk model is optional. When it is not loaded, or a scoring
call fails, predictions are null and reports fall back to the vital-sign
based overall status.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# ── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from matricare.config import settings
from matricare.modules.errors import DataFormatError, NotFoundError, StoreError
from matricare.modules.history_store import HistoryStore, SupabaseDocumentStore
from matricare.modules.models import PersonalInformation, PregnancyHistory, PregnancyInfo
from matricare.modules.report_service import DEFAULT_PATIENT_NAME, ReportService
from matricare.modules.risk_classifier import RiskClassifier

SERVICE_NAME = "MatriCare Report Backend API"
SERVICE_VERSION = "1.0.0"


# ════════════════════════════════════════════════════════════════════════════
# DATA MODELS
# ════════════════════════════════════════════════════════════════════════════

class MedicalDataRequest(BaseModel):
    personal_information: PersonalInformation
    pregnancy_history: PregnancyHistory = Field(default_factory=PregnancyHistory)
    user_name: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {"example": {
            "personalInformation": {
                "age": 29, "lifestyle": 2, "alcoholConsumption": False,
                "hasDiabetes": False, "systolicBloodPressure": 118,
                "diastolicBloodPressure": 76, "glucose": 92.0,
                "bodyTemperature": 98.4, "pulseRate": 82,
                "hemoglobinLevel": 11.8, "hba1c": 5.2, "respirationRate": 16
            },
            "pregnancyHistory": {
                "numberOfPregnancies": 2, "numberOfLiveBirths": 1,
                "numberOfAbortions": 0
            },
            "userName": "Kavitha Naik"
        }}


# ════════════════════════════════════════════════════════════════════════════
# SERVICE WIRING
# ════════════════════════════════════════════════════════════════════════════

def build_history_store() -> Optional[HistoryStore]:
    if not settings.store_configured():
        return None
    from supabase import create_client

    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return HistoryStore(
        SupabaseDocumentStore(client, key_column=settings.STORE_KEY_COLUMN),
        medical_history_table=settings.MEDICAL_HISTORY_TABLE,
        users_table=settings.USERS_TABLE,
    )


def build_report_service() -> ReportService:
    risk_classifier = RiskClassifier(model_path=settings.RISK_MODEL_PATH)
    if not risk_classifier.load_model():
        logger.warning("Risk model unavailable. Reports will use vital-sign status only.")

    try:
        history_store = build_history_store()
    except Exception as e:
        logger.error(f"Supabase client init failed: {e}")
        history_store = None

    return ReportService(history_store, risk_classifier)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("=" * 60)
    logger.info(f"{SERVICE_NAME} — Starting")
    logger.info(f"  Risk model : {settings.RISK_MODEL_PATH}")
    logger.info(f"  Store      : {'supabase' if settings.store_configured() else 'not configured'}")
    logger.info("=" * 60)

    app.state.report_service = build_report_service()

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")


app = FastAPI(
    title=SERVICE_NAME,
    version=SERVICE_VERSION,
    description="Maternal health reports with optional ML risk classification",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_report_service(request: Request) -> ReportService:
    service = getattr(request.app.state, 'report_service', None)
    if service is None:
        raise HTTPException(status_code=503, detail="Report service is not initialised")
    return service


def get_stored_report_service(service: ReportService = Depends(get_report_service)) -> ReportService:
    if not service.store_available:
        raise HTTPException(status_code=503, detail="Medical history store is not configured")
    return service


def _store_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, DataFormatError):
        return HTTPException(status_code=422, detail=str(exc))
    return HTTPException(status_code=502, detail=str(exc))


# ════════════════════════════════════════════════════════════════════════════
# ROUTES
# ════════════════════════════════════════════════════════════════════════════

@app.get("/")
def root(service: ReportService = Depends(get_report_service)):
    return {
        "service":          SERVICE_NAME,
        "version":          SERVICE_VERSION,
        "status":           "running",
        "model_loaded":     service.risk_classifier.is_loaded,
        "store_configured": service.store_available,
    }


@app.get("/api/v1/health")
def health(service: ReportService = Depends(get_report_service)):
    return {
        "service":          SERVICE_NAME,
        "status":           "ok",
        "risk_model":       service.risk_classifier.status(),
        "store_configured": service.store_available,
    }


@app.get("/api/v1/reports/{user_id}")
def get_health_report(user_id: str, service: ReportService = Depends(get_stored_report_service)):
    try:
        return service.get_health_report(user_id)
    except (NotFoundError, DataFormatError, StoreError) as e:
        logger.error(f"Error in get_health_report: {e}")
        raise _store_http_error(e)


@app.get("/api/v1/medical-history/{user_id}")
def get_medical_history(user_id: str, service: ReportService = Depends(get_stored_report_service)):
    try:
        return service.get_medical_history(user_id)
    except (NotFoundError, DataFormatError, StoreError) as e:
        raise _store_http_error(e)


@app.post("/api/v1/predict")
def predict_risk(body: MedicalDataRequest, service: ReportService = Depends(get_report_service)):
    pregnancy_info = PregnancyInfo.from_history(body.pregnancy_history)
    return {"riskPrediction": service.generate_ml_prediction(body.personal_information, pregnancy_info)}


@app.post("/api/v1/reports/generate")
def generate_report(body: MedicalDataRequest, service: ReportService = Depends(get_report_service)):
    """Report for freshly entered data, with the ML prediction attached."""
    pregnancy_info = PregnancyInfo.from_history(body.pregnancy_history)
    prediction = service.generate_ml_prediction(body.personal_information, pregnancy_info)
    report = service.generate_health_report_from_data(
        body.personal_information,
        body.user_name or DEFAULT_PATIENT_NAME,
        pregnancy_info,
        prediction,
    )
    return {"report": report, "riskPrediction": prediction}


@app.put("/api/v1/medical-history/{user_id}")
def save_medical_history(
    user_id: str,
    body: MedicalDataRequest,
    service: ReportService = Depends(get_stored_report_service)
):
    pregnancy_info = PregnancyInfo.from_history(body.pregnancy_history)
    prediction = service.generate_ml_prediction(body.personal_information, pregnancy_info)
    try:
        message = service.save_complete_data_with_ml(
            user_id, body.personal_information, body.pregnancy_history, prediction
        )
    except StoreError as e:
        raise _store_http_error(e)
    return {"message": message, "riskPrediction": prediction}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        workers=1,
        log_level="info",
    )

"""
Report Service
Entry points used by the API: read a stored report, run the ML prediction,
build a report from freshly entered data, and save data with its prediction.
"""

import logging
from datetime import date as date_type
from typing import Callable, Optional

from .errors import NotFoundError, StoreError
from .history_store import HistoryStore
from .models import (
    HealthReport,
    MedicalHistory,
    PersonalInformation,
    PregnancyHistory,
    PregnancyInfo,
    RiskPrediction,
)
from .report_assembler import assemble
from .risk_classifier import RiskClassifier

logger = logging.getLogger(__name__)

DEFAULT_PATIENT_NAME = "Patient"


class ReportService:
    def __init__(
        self,
        history_store: Optional[HistoryStore],
        risk_classifier: RiskClassifier,
        today: Callable[[], date_type] = date_type.today
    ):
        self.history_store = history_store
        self.risk_classifier = risk_classifier
        self.today = today

    @property
    def store_available(self) -> bool:
        return self.history_store is not None

    def get_medical_history(self, user_id: str) -> MedicalHistory:
        return self.history_store.fetch_history(user_id)

    def get_health_report(self, user_id: str) -> HealthReport:
        """
        Report for a stored history. The read path never runs the risk
        model; the overall status comes from the metrics alone.
        """
        medical_history = self.history_store.fetch_history(user_id)

        try:
            user_name = self.history_store.fetch_display_name(user_id)
        except (NotFoundError, StoreError) as e:
            logger.warning(f"Using default patient name for {user_id}: {e}")
            user_name = DEFAULT_PATIENT_NAME

        pregnancy_info = PregnancyInfo.from_history(medical_history.pregnancy_history)

        return assemble(
            personal_info=medical_history.personal_information,
            user_name=user_name,
            pregnancy_info=pregnancy_info,
            risk_prediction=None,
            today=self.today(),
        )

    def generate_ml_prediction(
        self,
        personal_info: PersonalInformation,
        pregnancy_info: Optional[PregnancyInfo]
    ) -> Optional[RiskPrediction]:
        return self.risk_classifier.predict(personal_info, pregnancy_info)

    def generate_health_report_from_data(
        self,
        personal_info: PersonalInformation,
        user_name: str,
        pregnancy_info: PregnancyInfo,
        risk_prediction: Optional[RiskPrediction]
    ) -> HealthReport:
        return assemble(personal_info, user_name, pregnancy_info, risk_prediction, today=self.today())

    def save_complete_data_with_ml(
        self,
        user_id: str,
        personal_info: PersonalInformation,
        pregnancy_history: PregnancyHistory,
        ml_prediction: Optional[RiskPrediction]
    ) -> str:
        return self.history_store.save_history(
            user_id,
            personal_info,
            pregnancy_history,
            risk_label=ml_prediction.risk_level if ml_prediction else None,
        )

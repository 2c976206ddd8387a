"""
Pregnancy Risk Classifier
=========================
Wraps a pre-trained scoring model that returns two class probabilities
(low risk, high risk) for a 14-feature vector, and maps the high-risk
probability onto a three-level label.

The classifier is optional by construction:
  - __init__() never loads anything; model is None until load_model()
  - load_model() never raises; failure leaves model = None
  - predict() returns None whenever the model is missing or the scoring
    call fails, so callers fall back to metric-based status
"""

import logging
import threading
from pathlib import Path
from typing import Any, List, Optional

import joblib
import numpy as np

from .errors import ModelUnavailableError
from .models import PersonalInformation, PregnancyInfo, RiskPrediction

logger = logging.getLogger(__name__)

HIGH_RISK = "High Risk"
MODERATE_RISK = "Moderate Risk"
LOW_RISK = "Low Risk"

HIGH_RISK_THRESHOLD = 0.7
MODERATE_RISK_THRESHOLD = 0.4

# Order is a contract with the trained model.
FEATURE_NAMES = [
    'age',
    'number_of_pregnancies',
    'number_of_live_births',
    'lifestyle',
    'alcohol_consumption',
    'has_diabetes',
    'systolic_blood_pressure',
    'diastolic_blood_pressure',
    'glucose',
    'body_temperature',
    'pulse_rate',
    'hemoglobin_level',
    'hba1c',
    'respiration_rate',
]


def build_feature_vector(
    personal_info: PersonalInformation,
    pregnancy_info: Optional[PregnancyInfo] = None
) -> List[float]:
    return [
        float(personal_info.age),
        float(pregnancy_info.number_of_pregnancies) if pregnancy_info else 0.0,
        float(pregnancy_info.number_of_live_births) if pregnancy_info else 0.0,
        float(personal_info.lifestyle),
        1.0 if personal_info.alcohol_consumption else 0.0,
        1.0 if personal_info.has_diabetes else 0.0,
        float(personal_info.systolic_blood_pressure),
        float(personal_info.diastolic_blood_pressure),
        float(personal_info.glucose),
        float(personal_info.body_temperature),
        float(personal_info.pulse_rate),
        float(personal_info.hemoglobin_level),
        float(personal_info.hba1c),
        float(personal_info.respiration_rate),
    ]


def risk_label_for_probability(high_risk_probability: float) -> str:
    # Model outputs are float32; compare at that precision so 0.4 stays 0.4.
    p = np.float32(high_risk_probability)
    if p > np.float32(HIGH_RISK_THRESHOLD):
        return HIGH_RISK
    if p > np.float32(MODERATE_RISK_THRESHOLD):
        return MODERATE_RISK
    return LOW_RISK


class RiskClassifier:
    """
    Holds either a loaded scoring model or nothing.

    Any object exposing predict_proba(X) -> [[p_low, p_high]] can be passed
    as `model`; load_model() fills it from a joblib file instead.
    """

    def __init__(self, model_path: Optional[Path] = None, model: Any = None):
        self.model_path = Path(model_path) if model_path else None
        self.model = model
        self.load_attempted = model is not None
        self.last_error: Optional[str] = None
        self._load_lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self.model is not None

    def load_model(self) -> bool:
        """
        Load the model file once. Never raises.
        Later calls return the outcome of the first attempt.
        """
        with self._load_lock:
            if self.load_attempted:
                return self.model is not None
            self.load_attempted = True

            if self.model_path is None:
                self.last_error = "No model path configured"
                logger.warning("Risk model path not configured - predictions disabled")
                return False

            try:
                model = joblib.load(self.model_path)
            except Exception as e:
                self.last_error = str(e)
                logger.error(f"Error loading risk model from {self.model_path}: {e}")
                return False

            if not hasattr(model, 'predict_proba'):
                self.last_error = f"{type(model).__name__} has no predict_proba"
                logger.error(f"Risk model at {self.model_path} cannot score: {self.last_error}")
                return False

            self.model = model
            logger.info(f"Risk model loaded successfully from {self.model_path}")
            return True

    def score(self, features: List[float]) -> float:
        """Return the high-risk probability for one feature vector."""
        if self.model is None:
            raise ModelUnavailableError("Risk model not loaded")

        X = np.asarray([features], dtype=np.float32)
        try:
            probabilities = np.asarray(self.model.predict_proba(X), dtype=float)
        except Exception as e:
            raise ModelUnavailableError(f"Risk model invocation failed: {e}") from e

        if probabilities.shape != (1, 2):
            raise ModelUnavailableError(
                f"Risk model returned shape {probabilities.shape}, expected (1, 2)"
            )
        return float(probabilities[0, 1])

    def predict(
        self,
        personal_info: PersonalInformation,
        pregnancy_info: Optional[PregnancyInfo] = None
    ) -> Optional[RiskPrediction]:
        if self.model is None:
            logger.warning("Model not loaded, skipping prediction")
            return None

        try:
            high_risk_probability = self.score(build_feature_vector(personal_info, pregnancy_info))
        except ModelUnavailableError as e:
            logger.error(f"Error during prediction: {e}")
            return None

        return RiskPrediction(risk_level=risk_label_for_probability(high_risk_probability))

    def status(self) -> dict:
        return {
            "model_loaded":   self.is_loaded,
            "load_attempted": self.load_attempted,
            "model_path":     str(self.model_path) if self.model_path else None,
            "error":          self.last_error,
        }

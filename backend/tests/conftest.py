from datetime import date

import pytest

from matricare.modules.history_store import HistoryStore
from matricare.modules.models import PersonalInformation, PregnancyHistory
from matricare.modules.report_service import ReportService
from matricare.modules.risk_classifier import RiskClassifier

FIXED_MILLIS = 1_760_000_000_000
FIXED_DATE = date(2026, 10, 18)


class FakeDocumentStore:
    """In-memory DocumentStore keyed by (table, key)."""

    def __init__(self):
        self.tables = {}
        self.fail_on = set()

    def get(self, table, key):
        if ('get', table) in self.fail_on:
            raise ConnectionError(f"{table} unreachable")
        doc = self.tables.get(table, {}).get(key)
        return dict(doc) if doc is not None else None

    def set(self, table, key, document):
        if ('set', table) in self.fail_on:
            raise ConnectionError(f"{table} unreachable")
        self.tables.setdefault(table, {})[key] = dict(document)


class FakeEstimator:
    """Stands in for a trained model: fixed high-risk probability."""

    def __init__(self, high_risk_probability):
        self.high_risk_probability = high_risk_probability
        self.calls = []

    def predict_proba(self, X):
        self.calls.append(X)
        return [[1.0 - self.high_risk_probability, self.high_risk_probability]]


@pytest.fixture
def document_store():
    return FakeDocumentStore()


@pytest.fixture
def history_store(document_store):
    return HistoryStore(document_store, clock=lambda: FIXED_MILLIS)


@pytest.fixture
def personal_info():
    return PersonalInformation(
        age=29,
        lifestyle=2,
        alcohol_consumption=False,
        has_diabetes=True,
        systolic_blood_pressure=118,
        diastolic_blood_pressure=76,
        glucose=92.0,
        body_temperature=98.4,
        pulse_rate=82,
        hemoglobin_level=11.8,
        hba1c=5.2,
        respiration_rate=16,
    )


@pytest.fixture
def pregnancy_history():
    return PregnancyHistory(number_of_pregnancies=2, number_of_live_births=1, number_of_abortions=1)


@pytest.fixture
def make_service(history_store):
    def _make(model=None, store=history_store):
        return ReportService(store, RiskClassifier(model=model), today=lambda: FIXED_DATE)
    return _make


@pytest.fixture
def estimator():
    return FakeEstimator

"""
MatriCare Modules Package
Core components for health report generation and risk classification
"""

from .errors import (
    MatriCareError,
    NotFoundError,
    HistoryNotFoundError,
    DisplayNameNotFoundError,
    DataFormatError,
    StoreError,
    ModelUnavailableError,
)
from .metric_classifier import classify
from .risk_classifier import RiskClassifier, build_feature_vector, risk_label_for_probability
from .report_assembler import assemble, determine_overall_status
from .history_store import DocumentStore, HistoryStore, SupabaseDocumentStore
from .report_service import ReportService


__all__ = [
    'MatriCareError',
    'NotFoundError',
    'HistoryNotFoundError',
    'DisplayNameNotFoundError',
    'DataFormatError',
    'StoreError',
    'ModelUnavailableError',
    'classify',
    'RiskClassifier',
    'build_feature_vector',
    'risk_label_for_probability',
    'assemble',
    'determine_overall_status',
    'DocumentStore',
    'HistoryStore',
    'SupabaseDocumentStore',
    'ReportService',
]

"""
Health Report Assembler
Builds the patient-facing report view model from stored vitals, pregnancy
data and an optional ML risk prediction.
"""

from datetime import date as date_type
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from .metric_classifier import classify
from .models import (
    BloodPressure,
    HealthMetric,
    HealthReport,
    HealthStatus,
    MetricStatus,
    PersonalInformation,
    PregnancyInfo,
    RiskPrediction,
)
from .risk_classifier import HIGH_RISK, MODERATE_RISK

REPORT_DATE_FORMAT = "%B %d, %Y"

COLOR_CRITICAL = "#F44336"
COLOR_WARNING = "#FF9800"
COLOR_NORMAL = "#4CAF50"

# ── Overall status copy ───────────────────────────────────────────────────────
_RISK_STATUS = {
    HIGH_RISK: HealthStatus(
        title="High Risk Pregnancy",
        description="ML Analysis indicates high risk - Immediate medical attention recommended",
        color=COLOR_CRITICAL,
    ),
    MODERATE_RISK: HealthStatus(
        title="Moderate Risk Pregnancy",
        description="ML Analysis suggests moderate risk - Regular monitoring recommended",
        color=COLOR_WARNING,
    ),
}
_LOW_RISK_STATUS = HealthStatus(
    title="Low Risk Pregnancy",
    description="ML Analysis indicates low risk - Continue regular care",
    color=COLOR_NORMAL,
)

_METRIC_STATUS = {
    MetricStatus.CRITICAL: HealthStatus(
        title="Critical Health Status",
        description="Some metrics are in critical range",
        color=COLOR_CRITICAL,
    ),
    MetricStatus.WARNING: HealthStatus(
        title="Warning Health Status",
        description="Some metrics are outside normal range",
        color=COLOR_WARNING,
    ),
    MetricStatus.NORMAL: HealthStatus(
        title="Excellent Health Status",
        description="All metrics are within normal range",
        color=COLOR_NORMAL,
    ),
}


def format_one_decimal(value: float) -> str:
    """Round half up, so 98.25 reads as 98.3."""
    return str(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def create_health_metric(
    id: str,
    title: str,
    value: str,
    unit: str,
    normal_range: str,
    current_value: float,
    range_min: float,
    range_max: float,
    icon: str
) -> HealthMetric:
    return HealthMetric(
        id=id,
        title=title,
        value=value,
        unit=unit,
        normal_range=normal_range,
        current_value=current_value,
        range_min=range_min,
        range_max=range_max,
        icon=icon,
        status=classify(current_value, range_min, range_max),
    )


def build_metrics(personal_info: PersonalInformation) -> List[HealthMetric]:
    sbp = personal_info.systolic_blood_pressure
    dbp = personal_info.diastolic_blood_pressure
    pulse = personal_info.pulse_rate
    temp = personal_info.body_temperature

    return [
        create_health_metric("1", "Systolic Blood Pressure", str(sbp),
                             "mmHg", "95-160", float(sbp), 95.0, 160.0, "sbp"),
        create_health_metric("2", "Diastolic Blood Pressure", str(dbp),
                             "mmHg", "60-100", float(dbp), 60.0, 100.0, "sbp"),
        create_health_metric("3", "Pulse Rate", str(pulse),
                             "BPM", "60-100", float(pulse), 60.0, 100.0, "bp"),
        create_health_metric("4", "Body Temperature", format_one_decimal(temp),
                             "°F", "97.0-99.0", float(temp), 97.0, 99.0, "thermometer"),
    ]


def determine_overall_status(
    metrics: List[HealthMetric],
    risk_prediction: Optional[RiskPrediction] = None
) -> HealthStatus:
    """
    A present prediction decides the status on its own; metric statuses are
    only consulted when there is no prediction.
    """
    if risk_prediction is not None:
        return _RISK_STATUS.get(risk_prediction.risk_level, _LOW_RISK_STATUS).model_copy()

    statuses = {m.status for m in metrics}
    if MetricStatus.CRITICAL in statuses:
        return _METRIC_STATUS[MetricStatus.CRITICAL].model_copy()
    if MetricStatus.WARNING in statuses:
        return _METRIC_STATUS[MetricStatus.WARNING].model_copy()
    return _METRIC_STATUS[MetricStatus.NORMAL].model_copy()


def assemble(
    personal_info: PersonalInformation,
    user_name: str,
    pregnancy_info: PregnancyInfo,
    risk_prediction: Optional[RiskPrediction] = None,
    today: Optional[date_type] = None
) -> HealthReport:
    today = today or date_type.today()
    metrics = build_metrics(personal_info)

    return HealthReport(
        patient_name=user_name,
        date=today.strftime(REPORT_DATE_FORMAT),
        heart_rate=personal_info.pulse_rate,
        blood_pressure=BloodPressure(
            systolic=personal_info.systolic_blood_pressure,
            diastolic=personal_info.diastolic_blood_pressure,
        ),
        temperature=personal_info.body_temperature,
        detailed_metrics=metrics,
        overall_status=determine_overall_status(metrics, risk_prediction),
        pregnancy_info=pregnancy_info,
    )

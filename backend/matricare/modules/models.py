"""
MatriCare record and report models

Stored documents keep the camelCase field names the mobile client writes
(personalInformation, createdAt, mlRiskLevel, ...). Python code uses the
snake_case attribute names.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class _Document(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ════════════════════════════════════════════════════════════════════════════
# STORED RECORDS
# ════════════════════════════════════════════════════════════════════════════

class PersonalInformation(_Document):
    age: int = 0
    lifestyle: int = 0
    alcohol_consumption: bool = False
    has_diabetes: bool = False
    systolic_blood_pressure: int = 0
    diastolic_blood_pressure: int = 0
    glucose: float = 0.0
    body_temperature: float = 0.0
    pulse_rate: int = 0
    hemoglobin_level: float = 0.0
    hba1c: float = 0.0
    respiration_rate: int = 0

    class Config:
        json_schema_extra = {"example": {
            "age": 29, "lifestyle": 2, "alcoholConsumption": False,
            "hasDiabetes": False, "systolicBloodPressure": 118,
            "diastolicBloodPressure": 76, "glucose": 92.0,
            "bodyTemperature": 98.4, "pulseRate": 82,
            "hemoglobinLevel": 11.8, "hba1c": 5.2, "respirationRate": 16
        }}


class PregnancyHistory(_Document):
    number_of_pregnancies: int = 0
    number_of_live_births: int = 0
    number_of_abortions: int = 0


class PregnancyInfo(_Document):
    number_of_pregnancies: int = 0
    number_of_live_births: int = 0
    number_of_abortions: int = 0

    @classmethod
    def from_history(cls, history: PregnancyHistory) -> "PregnancyInfo":
        return cls(
            number_of_pregnancies=history.number_of_pregnancies,
            number_of_live_births=history.number_of_live_births,
            number_of_abortions=history.number_of_abortions,
        )


class MedicalHistory(_Document):
    user_id: str = ""
    personal_information: PersonalInformation = Field(default_factory=PersonalInformation)
    pregnancy_history: PregnancyHistory = Field(default_factory=PregnancyHistory)
    created_at: int = 0   # epoch millis
    updated_at: int = 0   # epoch millis
    ml_risk_level: Optional[str] = None


# ════════════════════════════════════════════════════════════════════════════
# REPORT VIEW MODEL
# ════════════════════════════════════════════════════════════════════════════

class MetricStatus(str, Enum):
    NORMAL = "NORMAL"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class RiskPrediction(_Document):
    risk_level: str


class HealthMetric(_Document):
    id: str
    title: str
    value: str
    unit: str
    normal_range: str
    current_value: float
    range_min: float
    range_max: float
    icon: str
    status: MetricStatus


class BloodPressure(_Document):
    systolic: int
    diastolic: int


class HealthStatus(_Document):
    title: str
    description: str
    color: str   # hex, e.g. "#F44336"


class HealthReport(_Document):
    patient_name: str
    date: str
    heart_rate: int
    blood_pressure: BloodPressure
    temperature: float
    detailed_metrics: List[HealthMetric]
    overall_status: HealthStatus
    pregnancy_info: PregnancyInfo

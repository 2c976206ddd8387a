"""
Tolerance-band classification of a single vital sign against its
declared normal range.
"""

from .models import MetricStatus

# Bands are fractions of each bound, not of the range width.
CRITICAL_LOW_FACTOR = 0.9
CRITICAL_HIGH_FACTOR = 1.1
WARNING_LOW_FACTOR = 0.95
WARNING_HIGH_FACTOR = 1.05


def classify(value: float, range_min: float, range_max: float) -> MetricStatus:
    if value < range_min * CRITICAL_LOW_FACTOR or value > range_max * CRITICAL_HIGH_FACTOR:
        return MetricStatus.CRITICAL
    if value < range_min * WARNING_LOW_FACTOR or value > range_max * WARNING_HIGH_FACTOR:
        return MetricStatus.WARNING
    return MetricStatus.NORMAL

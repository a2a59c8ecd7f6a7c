"""Provider and measurement category enums."""

from enum import Enum


class Provider(str, Enum):
    """Supported data providers."""

    IHEALTH = "ihealth"
    GOOGLE_FIT = "googlefit"


class Category(str, Enum):
    """Measurement categories."""

    BLOOD_PRESSURE = "blood_pressure"
    HEART_RATE = "heart_rate"
    OXYGEN_SATURATION = "oxygen_saturation"
    BODY_WEIGHT = "body_weight"
    CALORIES_BURNED = "calories_burned"
    STEP_COUNT = "step_count"

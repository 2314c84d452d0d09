"""
Enum and label tables shared by the text formatter and the UI preview.

Each enum has exactly one table here. Lookups are expected to be exhaustive;
a value without an entry is a programming error and surfaces as KeyError.
"""

from enum import Enum
from typing import Dict, Tuple


class Urgency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

class PostType(str, Enum):
    ADOPTION = "adoption"
    FOSTER = "foster"
    LOST = "lost"
    FOUND = "found"
    EMERGENCY = "emergency"
    TRANSPORT = "transport"
    VOLUNTEER = "volunteer"

class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"

class CaseStatus(str, Enum):
    INVESTIGATING = "investigating"
    CONFIRMED = "confirmed"
    RESOLVED = "resolved"

class AlertSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

class AlertStatus(str, Enum):
    INVESTIGATING = "investigating"
    CONFIRMED = "confirmed"
    BLACKLISTED = "blacklisted"
    RESOLVED = "resolved"

class ViolationCategory(str, Enum):
    NEGLECT = "neglect"
    ABUSE = "abuse"
    HOARDING = "hoarding"
    OVERCROWDING = "overcrowding"
    FRAUD = "fraud"
    UNLICENSED = "unlicensed"
    OTHER = "other"


# (emoji, label)
POST_TYPE_LABELS: Dict[PostType, Tuple[str, str]] = {
    PostType.ADOPTION: ("🏠", "Adoption"),
    PostType.FOSTER: ("💝", "Foster Needed"),
    PostType.LOST: ("🔍", "Lost Animal"),
    PostType.FOUND: ("📍", "Found Animal"),
    PostType.EMERGENCY: ("🚨", "Emergency Rescue"),
    PostType.TRANSPORT: ("🚗", "Transport Needed"),
    PostType.VOLUNTEER: ("👥", "Volunteers Needed"),
}

# (emoji, label); low urgency carries no emoji
URGENCY_LABELS: Dict[Urgency, Tuple[str, str]] = {
    Urgency.LOW: ("", "Low Priority"),
    Urgency.MEDIUM: ("⚡", "Medium Priority"),
    Urgency.HIGH: ("🔥", "High Priority"),
    Urgency.CRITICAL: ("🆘", "CRITICAL - URGENT"),
}

GENDER_LABELS: Dict[Gender, str] = {
    Gender.MALE: "Male",
    Gender.FEMALE: "Female",
    Gender.UNKNOWN: "Unknown",
}

CASE_STATUS_LABELS: Dict[CaseStatus, str] = {
    CaseStatus.INVESTIGATING: "Under Investigation",
    CaseStatus.CONFIRMED: "Confirmed Fraud",
    CaseStatus.RESOLVED: "Resolved",
}

# (emoji, header)
ALERT_SEVERITY_LABELS: Dict[AlertSeverity, Tuple[str, str]] = {
    AlertSeverity.LOW: ("ℹ️", "ADVISORY"),
    AlertSeverity.MEDIUM: ("⚠️", "WARNING"),
    AlertSeverity.HIGH: ("🚨", "SERIOUS WARNING"),
    AlertSeverity.CRITICAL: ("🆘", "CRITICAL WARNING"),
}

ALERT_STATUS_LABELS: Dict[AlertStatus, str] = {
    AlertStatus.INVESTIGATING: "Under Investigation",
    AlertStatus.CONFIRMED: "Confirmed",
    AlertStatus.BLACKLISTED: "Blacklisted",
    AlertStatus.RESOLVED: "Resolved",
}

VIOLATION_CATEGORY_LABELS: Dict[ViolationCategory, str] = {
    ViolationCategory.NEGLECT: "Neglect",
    ViolationCategory.ABUSE: "Abuse",
    ViolationCategory.HOARDING: "Hoarding",
    ViolationCategory.OVERCROWDING: "Overcrowding",
    ViolationCategory.FRAUD: "Fraud",
    ViolationCategory.UNLICENSED: "Unlicensed Operation",
    ViolationCategory.OTHER: "Other",
}


def label_tables() -> Dict[str, Dict[str, dict]]:
    """
    Serializable view of every table, keyed by enum value.
    Served to the UI so the live preview uses the same wording as the formatter.
    """
    def pairs(table, first, second):
        return {k.value: {first: v[0], second: v[1]} for k, v in table.items()}

    def plain(table):
        return {k.value: {"label": v} for k, v in table.items()}

    return {
        "post_type": pairs(POST_TYPE_LABELS, "emoji", "label"),
        "urgency": pairs(URGENCY_LABELS, "emoji", "label"),
        "gender": plain(GENDER_LABELS),
        "case_status": plain(CASE_STATUS_LABELS),
        "alert_severity": pairs(ALERT_SEVERITY_LABELS, "emoji", "header"),
        "alert_status": plain(ALERT_STATUS_LABELS),
        "violation_category": plain(VIOLATION_CATEGORY_LABELS),
    }

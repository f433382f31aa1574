"""
User allergy records and the result of checking a recipe against them.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class Severity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"

    @property
    def level(self) -> int:
        return _SEVERITY_LEVELS[self]


_SEVERITY_LEVELS = {Severity.MILD: 1, Severity.MODERATE: 2, Severity.SEVERE: 3}

SEVERITY_LABELS = {
    Severity.MILD: "軽度",
    Severity.MODERATE: "中度",
    Severity.SEVERE: "重度",
}


@dataclass
class UserAllergy:
    allergen: str
    severity: Severity = Severity.MILD
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "UserAllergy":
        raw = str(data.get("severity") or Severity.MILD.value).lower()
        try:
            severity = Severity(raw)
        except ValueError:
            severity = Severity.MILD
        return cls(allergen=str(data.get("allergen") or ""), severity=severity, notes=data.get("notes"))


@dataclass
class AllergyCheck:
    has_allergens: bool = False
    conflicting_allergens: List[str] = field(default_factory=list)
    max_severity: Optional[Severity] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasAllergens": self.has_allergens,
            "conflictingAllergens": list(self.conflicting_allergens),
            "maxSeverity": self.max_severity.value if self.max_severity else None,
        }

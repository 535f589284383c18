# survey/models.py — value types shared by the registry, scorer and session
from __future__ import annotations
from dataclasses import dataclass
import datetime
from enum import IntEnum
from typing import Dict, List, Optional, Tuple


class SurveyError(Exception):
    """Base class for user-recoverable survey errors."""


class NoAnswerSelected(SurveyError):
    def __init__(self, index: int):
        super().__init__(f"no answer selected for step {index + 1}")
        self.index = index


class IdentityIncomplete(SurveyError):
    def __init__(self, missing: List[str]):
        super().__init__("missing identity fields: " + ", ".join(missing))
        self.missing = missing


class AnswerTier(IntEnum):
    NOT_AT_ALL = 0
    SEVERAL_DAYS = 1
    MORE_THAN_HALF = 2
    NEARLY_EVERY_DAY = 3


@dataclass(frozen=True)
class Question:
    text: str


@dataclass(frozen=True)
class TenthQuestion:
    text: str
    choices: Tuple[str, ...]


def normalize_date(text: str) -> str:
    """
    yyyy.mm.dd / yyyy-mm-dd / yyyy/mm/dd → ISO.
    Only year-first input with a real calendar date is rewritten; anything else
    (day-first, month-first, out-of-range parts) is kept exactly as typed.
    """
    s = text.strip()
    for sep in [".", "-", "/"]:
        if sep in s:
            parts = s.split(sep)
            if len(parts) != 3 or len(parts[0]) != 4 or not all(p.isdigit() for p in parts):
                return s
            try:
                parsed = datetime.date(*(int(p) for p in parts))
            except ValueError:
                return s
            return parsed.isoformat()
    return s


@dataclass(frozen=True)
class Participant:
    name: str
    id: str
    date: str

    @classmethod
    def from_form(cls, name: str, pid: str, date: str) -> "Participant":
        fields = {"name": name.strip(), "id": pid.strip(), "date": date.strip()}
        missing = [k for k, v in fields.items() if not v]
        if missing:
            raise IdentityIncomplete(missing)
        return cls(name=fields["name"], id=fields["id"], date=normalize_date(fields["date"]))

    def to_record(self) -> Dict[str, str]:
        return {"NAME": self.name, "ID": self.id, "DATE": self.date}


@dataclass(frozen=True)
class QuestionView:
    index: int
    text: str
    choices: Tuple[str, ...]
    is_tenth: bool = False


@dataclass(frozen=True)
class SurveyResult:
    total_score: int
    severity: str
    advisory: bool

    def message(self, strings: Optional[Dict[str, str]] = None) -> str:
        """Result dialog body; `strings` overrides the default captions."""
        s = {
            "total_score": "Total Score:",
            "severity": "Severity:",
            "consider_disorder": "Consider Depressive Disorder",
        }
        s.update(strings or {})
        lines = [f"{s['total_score']} {self.total_score}", f"{s['severity']} {self.severity}"]
        if self.advisory:
            lines.append(s["consider_disorder"])
        return "\n".join(lines)


@dataclass
class AnswerRecord:
    no: int
    text: str
    label: str
    score: int

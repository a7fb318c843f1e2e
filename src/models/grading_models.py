"""Transient data structures used while grading and for the signed-in user.

None of these are persisted by the grading pipeline; they live for the
duration of a request or in the process-scoped results store.
"""

import math
import random
import string
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from flask_login import UserMixin

_ID_ALPHABET = string.digits + string.ascii_lowercase


def random_suffix(length: int = 9) -> str:
    """Random base36 string, as used in generated ids."""
    return "".join(random.choice(_ID_ALPHABET) for _ in range(length))


def epoch_millis() -> int:
    return int(time.time() * 1000)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (3.5 -> 4, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


@dataclass
class Criterion:
    """One weighted grading dimension extracted from a rubric."""

    name: str
    weight: int


@dataclass
class CriterionResult:
    """Score of a single criterion for a single student."""

    name: str
    score: int
    max_score: int
    feedback: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "maxScore": self.max_score,
            "feedback": self.feedback,
        }


@dataclass
class GradingResult:
    """Aggregated result for one uploaded answer file."""

    id: str
    name: str
    score: int
    feedback: str
    criteria: List[CriterionResult] = field(default_factory=list)

    @staticmethod
    def new_id() -> str:
        return f"student-{epoch_millis()}-{random_suffix()}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "feedback": self.feedback,
            "criteria": [criterion.to_dict() for criterion in self.criteria],
        }


@dataclass
class GradingSession:
    """One submission of the grading form together with its results."""

    id: str
    name: str
    subject: str
    user_id: Optional[str]
    rubric_source: str
    results: List[GradingResult] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @staticmethod
    def new_id() -> str:
        return f"session-{epoch_millis()}-{random_suffix()}"

    @property
    def average_score(self) -> int:
        if not self.results:
            return 0
        return round_half_up(sum(r.score for r in self.results) / len(self.results))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "subject": self.subject,
            "rubric_source": self.rubric_source,
            "created_at": self.created_at.isoformat(),
            "average_score": self.average_score,
            "results": [result.to_dict() for result in self.results],
        }


@dataclass
class StudentFile:
    """An uploaded answer file held in memory."""

    filename: str
    content: bytes
    mime_type: str


class User(UserMixin):
    """The signed-in user as exposed to the application (no password)."""

    def __init__(self, id: str, email: str, name: str = ""):
        self.id = id
        self.email = email
        self.name = name

    @property
    def display_name(self) -> str:
        return self.name or self.email

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(id=data["id"], email=data.get("email", ""), name=data.get("name", ""))

    def __repr__(self):
        return f"User(id={self.id!r}, email={self.email!r})"


@dataclass
class StoredUser:
    """A registered user as kept in storage, including the password."""

    id: str
    name: str
    email: str
    password: str

    def to_user(self) -> User:
        return User(id=self.id, email=self.email, name=self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredUser":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            email=data["email"],
            password=data.get("password", ""),
        )

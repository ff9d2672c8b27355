"""Partial-update payloads.

Each patch lists the columns a client may change. Only fields present in the
request (and not null) are applied; an empty patch changes nothing. Text is
stripped, as on create.
"""
from dataclasses import dataclass, fields
from typing import ClassVar, Dict, List, Optional


@dataclass
class Patch:
    # attribute name -> request JSON key, where they differ
    json_keys: ClassVar[Dict[str, str]] = {}

    @classmethod
    def from_json(cls, data):
        values = {}
        for f in fields(cls):
            value = data.get(cls.json_keys.get(f.name, f.name))
            if isinstance(value, str):
                value = value.strip()
            if value is not None:
                values[f.name] = value
        return cls(**values)

    def present_fields(self) -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]

    def apply(self, entity) -> int:
        """Set present fields on `entity`; returns how many were set."""
        present = self.present_fields()
        for name in present:
            setattr(entity, name, getattr(self, name))
        return len(present)

    def __bool__(self):
        return bool(self.present_fields())


@dataclass
class UserPatch(Patch):
    name: Optional[str] = None
    email: Optional[str] = None


@dataclass
class AdminUserPatch(UserPatch):
    role: Optional[str] = None


@dataclass
class CoursePatch(Patch):
    title: Optional[str] = None
    description: Optional[str] = None
    instructor: Optional[str] = None
    price: Optional[float] = None


@dataclass
class LessonPatch(Patch):
    json_keys: ClassVar[Dict[str, str]] = {"video_url": "videoUrl"}

    title: Optional[str] = None
    video_url: Optional[str] = None


@dataclass
class QuizPatch(Patch):
    title: Optional[str] = None


@dataclass
class QuestionPatch(Patch):
    text: Optional[str] = None


@dataclass
class OptionPatch(Patch):
    json_keys: ClassVar[Dict[str, str]] = {"is_correct": "isCorrect"}

    text: Optional[str] = None
    is_correct: Optional[bool] = None

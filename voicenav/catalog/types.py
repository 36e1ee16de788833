"""Pydantic models for voice commands and the catalog they form."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

ANY_AUDIENCE = "any"


class Role(str, Enum):
    """Platform user roles."""

    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"
    PRINCIPAL = "principal"


class Command(BaseModel):
    """A recognizable utterance and the navigation it triggers.

    ``phrase`` is stored lowercase and trimmed. ``action`` is an opaque
    route handed to the host's navigator unchanged.
    """

    model_config = ConfigDict(frozen=True)

    phrase: str
    action: str
    feedback_text: str
    audience: Role | Literal["any"] = ANY_AUDIENCE

    @field_validator("phrase")
    @classmethod
    def _normalize_phrase(cls, value: str) -> str:
        return value.strip().lower()

    def visible_to(self, role: Role) -> bool:
        return self.audience == ANY_AUDIENCE or self.audience == role


class DynamicEntity(BaseModel):
    """A lesson topic supplied by the host, e.g. ``{"title": "Algebra", "slug": "algebra"}``."""

    model_config = ConfigDict(frozen=True)

    title: str
    slug: str


class Catalog(BaseModel):
    """Ordered, immutable set of commands built for one role."""

    model_config = ConfigDict(frozen=True)

    role: Role
    commands: tuple[Command, ...] = ()

    @property
    def phrases(self) -> list[str]:
        return [command.phrase for command in self.commands]

    def __len__(self) -> int:
        return len(self.commands)

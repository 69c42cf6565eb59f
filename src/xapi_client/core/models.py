"""Statement value records.

These are the canonical xAPI records built by :mod:`xapi_client.builders`.
All records are frozen; ``to_wire()`` returns the JSON-ready dict with
xAPI key names and every absent field dropped.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import ObjectType
from .ids import generate_id, iso_timestamp

Number = Union[int, float]
LanguageMap = dict[str, str]  # language tag -> text


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump with xAPI key names, omitting absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Actor / Verb / Activity
# ---------------------------------------------------------------------------

class Actor(_Record):
    """An Agent identified by mailbox."""

    name: str
    mbox: str  # "mailto:<email>"
    object_type: ObjectType = Field(default=ObjectType.AGENT, alias="objectType")
    openid: str | None = None  # homepage


class Verb(_Record):
    id: str  # IRI
    display: LanguageMap = Field(default_factory=dict)


class ActivityDefinition(_Record):
    name: LanguageMap | None = None
    description: LanguageMap | None = None
    type: str | None = None  # activity type IRI


class Activity(_Record):
    """The statement object."""

    object_type: ObjectType = Field(default=ObjectType.ACTIVITY, alias="objectType")
    id: str  # IRI
    definition: ActivityDefinition | None = None


# ---------------------------------------------------------------------------
# Result / Context
# ---------------------------------------------------------------------------

class Score(_Record):
    scaled: Number | None = None  # -1.0 .. 1.0
    raw: Number | None = None
    min: Number | None = None
    max: Number | None = None


class Result(_Record):
    completion: bool | None = None
    success: bool | None = None
    score: Score | None = None
    duration: str | None = None  # ISO-8601 duration, e.g. "PT30M"


class Context(_Record):
    instructor: Actor | None = None
    registration: str | None = None  # UUID
    context_activities: dict[str, Any] | None = Field(
        default=None, alias="contextActivities",
    )
    language: str | None = None


# ---------------------------------------------------------------------------
# Statement
# ---------------------------------------------------------------------------

class Statement(_Record):
    """Actor / verb / object, with optional result and context.

    ``id`` and ``timestamp`` may be left unset here; the transmitter fills
    them in before anything leaves the process.
    """

    id: str | None = None
    timestamp: str | None = None  # ISO-8601 instant
    actor: Actor
    verb: Verb
    activity: Activity = Field(alias="object")
    result: Result | None = None
    context: Context | None = None

    def with_defaults(self) -> Statement:
        """Return a copy with ``id`` and ``timestamp`` filled in if missing."""
        update: dict[str, str] = {}
        if not self.id:
            update["id"] = generate_id()
        if not self.timestamp:
            update["timestamp"] = iso_timestamp()
        if not update:
            return self
        return self.model_copy(update=update)

"""Record builders for xAPI statements.

Every builder is a pure function: explicit arguments in, a frozen record
out, no I/O and no hidden state.  ``None`` always means "not provided"
and the corresponding field is left out of the record.

Usage::

    actor = create_actor("Ada", "ada@example.com")
    verb = create_verb(Verbs.COMPLETED, "completed")
    lesson = create_activity(
        "https://example.com/lessons/1", "Lesson 1", "Intro lesson",
    )
    result = create_result(completion=True, raw_score=9, max_score=10)
    statement = create_statement(actor, verb, lesson, result=result)
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from .core.enums import DEFAULT_LANGUAGE, ActivityTypes
from .core.ids import generate_id, iso_timestamp
from .core.models import (
    Activity,
    ActivityDefinition,
    Actor,
    Context,
    Number,
    Result,
    Score,
    Statement,
    Verb,
)


def _iri(value: str | Enum) -> str:
    """Accept either a plain IRI or a ``Verbs`` / ``ActivityTypes`` member."""
    return value.value if isinstance(value, Enum) else value


def create_actor(name: str, email: str, homepage: str | None = None) -> Actor:
    """Build an Agent identified by ``mailto:<email>``.

    ``openid`` is only set when a homepage is given.
    """
    return Actor(
        name=name,
        mbox=f"mailto:{email}",
        openid=homepage or None,
    )


def create_verb(
    id: str | Enum, display: str, language: str = DEFAULT_LANGUAGE,
) -> Verb:
    """Build a verb with a single-language display map.

    Only one language entry is supported per verb.
    """
    return Verb(id=_iri(id), display={language: display})


def create_activity(
    id: str,
    name: str,
    description: str,
    type: str | Enum = ActivityTypes.LESSON,
    language: str = DEFAULT_LANGUAGE,
) -> Activity:
    """Build an Activity with single-language name and description."""
    return Activity(
        id=id,
        definition=ActivityDefinition(
            name={language: name},
            description={language: description},
            type=_iri(type),
        ),
    )


def create_result(
    completion: bool | None = None,
    success: bool | None = None,
    scaled_score: Number | None = None,
    raw_score: Number | None = None,
    min_score: Number | None = None,
    max_score: Number | None = None,
    duration: str | None = None,
) -> Result:
    """Build a result; every field is independently optional.

    ``score`` is present only when at least one of the four score values
    is given, and carries only the values that were given.  ``False`` and
    ``0`` are real values, not omissions.
    """
    score_values = {
        "scaled": scaled_score,
        "raw": raw_score,
        "min": min_score,
        "max": max_score,
    }
    provided = {k: v for k, v in score_values.items() if v is not None}

    return Result(
        completion=completion,
        success=success,
        score=Score(**provided) if provided else None,
        duration=duration or None,
    )


def create_context(
    instructor: Actor | None = None,
    registration: str | None = None,
    context_activities: dict[str, Any] | None = None,
    language: str | None = None,
) -> Context:
    """Build a context from whichever fields are supplied and non-empty."""
    return Context(
        instructor=instructor,
        registration=registration or None,
        context_activities=context_activities or None,
        language=language or None,
    )


def create_statement(
    actor: Actor,
    verb: Verb,
    object: Activity,
    result: Result | None = None,
    context: Context | None = None,
    id: str | None = None,
    timestamp: str | None = None,
) -> Statement:
    """Assemble a statement, generating ``id`` and ``timestamp`` if absent."""
    return Statement(
        id=id or generate_id(),
        timestamp=timestamp or iso_timestamp(),
        actor=actor,
        verb=verb,
        activity=object,
        result=result,
        context=context,
    )

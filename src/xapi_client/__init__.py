"""xAPI statement builders and an async LRS client.

Public API
----------
::

    from xapi_client import (
        LRSClient,
        Verbs,
        ActivityTypes,
        create_actor,
        create_verb,
        create_activity,
        create_result,
        create_context,
        create_statement,
    )
"""

from __future__ import annotations

__version__ = "2.0.0"

from xapi_client.builders import (
    create_activity,
    create_actor,
    create_context,
    create_result,
    create_statement,
    create_verb,
)
from xapi_client.client import LRSClient
from xapi_client.core.config import LRSConfig, Settings, load_settings
from xapi_client.core.enums import ActivityTypes, ObjectType, Verbs
from xapi_client.core.errors import (
    ConfigurationError,
    StatementError,
    TransmissionError,
    XAPIError,
)
from xapi_client.core.ids import generate_id
from xapi_client.core.models import (
    Activity,
    ActivityDefinition,
    Actor,
    Context,
    Result,
    Score,
    Statement,
    Verb,
)

__all__ = [
    "Activity",
    "ActivityDefinition",
    "ActivityTypes",
    "Actor",
    "ConfigurationError",
    "Context",
    "LRSClient",
    "LRSConfig",
    "ObjectType",
    "Result",
    "Score",
    "Settings",
    "Statement",
    "StatementError",
    "TransmissionError",
    "Verb",
    "Verbs",
    "XAPIError",
    "create_activity",
    "create_actor",
    "create_context",
    "create_result",
    "create_statement",
    "create_verb",
    "generate_id",
    "load_settings",
]

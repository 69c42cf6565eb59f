"""Enumerations and well-known IRIs used in xAPI statements."""

from enum import Enum


class ObjectType(str, Enum):
    AGENT = "Agent"
    ACTIVITY = "Activity"


class Verbs(str, Enum):
    """ADL verb IRIs."""

    EXPERIENCED = "http://adlnet.gov/expapi/verbs/experienced"
    ATTENDED = "http://adlnet.gov/expapi/verbs/attended"
    ATTEMPTED = "http://adlnet.gov/expapi/verbs/attempted"
    COMPLETED = "http://adlnet.gov/expapi/verbs/completed"
    PASSED = "http://adlnet.gov/expapi/verbs/passed"
    FAILED = "http://adlnet.gov/expapi/verbs/failed"
    ANSWERED = "http://adlnet.gov/expapi/verbs/answered"
    INTERACTED = "http://adlnet.gov/expapi/verbs/interacted"
    IMPORTED = "http://adlnet.gov/expapi/verbs/imported"
    CREATED = "http://adlnet.gov/expapi/verbs/created"
    SHARED = "http://adlnet.gov/expapi/verbs/shared"
    VOIDED = "http://adlnet.gov/expapi/verbs/voided"


class ActivityTypes(str, Enum):
    """ADL activity type IRIs."""

    COURSE = "http://adlnet.gov/expapi/activities/course"
    LESSON = "http://adlnet.gov/expapi/activities/lesson"
    ASSESSMENT = "http://adlnet.gov/expapi/activities/assessment"
    INTERACTION = "http://adlnet.gov/expapi/activities/interaction"
    CMI_INTERACTION = "http://adlnet.gov/expapi/activities/cmi.interaction"
    QUESTION = "http://adlnet.gov/expapi/activities/question"
    OBJECTIVE = "http://adlnet.gov/expapi/activities/objective"
    LINK = "http://adlnet.gov/expapi/activities/link"


DEFAULT_LANGUAGE = "en-US"
DEFAULT_VERSION = "1.0.3"  # X-Experience-API-Version

"""Amazon Voice ID (JSON 1.0)."""

from __future__ import annotations

from aws_service_clients.core.client import AWSClient
from aws_service_clients.core.operation import OperationSpec
from aws_service_clients.core.protocols import JsonProtocol

_OPERATION_NAMES = (
    "CreateDomain",
    "DeleteDomain",
    "DeleteFraudster",
    "DeleteSpeaker",
    "DescribeDomain",
    "DescribeFraudster",
    "DescribeFraudsterRegistrationJob",
    "DescribeSpeaker",
    "DescribeSpeakerEnrollmentJob",
    "EvaluateSession",
    "ListDomains",
    "ListFraudsterRegistrationJobs",
    "ListSpeakerEnrollmentJobs",
    "ListSpeakers",
    "ListTagsForResource",
    "OptOutSpeaker",
    "StartFraudsterRegistrationJob",
    "StartSpeakerEnrollmentJob",
    "TagResource",
    "UntagResource",
    "UpdateDomain",
)

_OPERATIONS = tuple(OperationSpec(name) for name in _OPERATION_NAMES)


class VoiceIDClient(AWSClient):
    SERVICE_NAME = "voiceid"
    ENDPOINT_PREFIX = "voiceid"
    ENDPOINT_RULESET = "voice-id"
    SERVICE_CLIENT_NAME = "VoiceID"
    API_VERSION = "2021-09-27"
    PROTOCOL = JsonProtocol("VoiceID", json_version="1.0")
    OPERATIONS = _OPERATIONS

"""Client error taxonomy shared by every service client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class CoreErrors(str, Enum):
    """Error types recognised independently of the calling service."""

    ACCESS_DENIED = "AccessDenied"
    CLIENT_SIGNING_FAILURE = "ClientSigningFailure"
    ENDPOINT_RESOLUTION_FAILURE = "EndpointResolutionFailure"
    INCOMPLETE_SIGNATURE = "IncompleteSignature"
    INTERNAL_FAILURE = "InternalFailure"
    INVALID_ACCESS_KEY_ID = "InvalidAccessKeyId"
    INVALID_ACTION = "InvalidAction"
    INVALID_CLIENT_TOKEN_ID = "InvalidClientTokenId"
    INVALID_PARAMETER_COMBINATION = "InvalidParameterCombination"
    INVALID_PARAMETER_VALUE = "InvalidParameterValue"
    INVALID_QUERY_PARAMETER = "InvalidQueryParameter"
    INVALID_SIGNATURE = "InvalidSignature"
    MALFORMED_QUERY_STRING = "MalformedQueryString"
    MISSING_ACTION = "MissingAction"
    MISSING_AUTHENTICATION_TOKEN = "MissingAuthenticationToken"
    MISSING_PARAMETER = "MissingParameter"
    NETWORK_CONNECTION = "NetworkConnection"
    OPT_IN_REQUIRED = "OptInRequired"
    REQUEST_EXPIRED = "RequestExpired"
    REQUEST_TIME_TOO_SKEWED = "RequestTimeTooSkewed"
    REQUEST_TIMEOUT = "RequestTimeout"
    RESOURCE_NOT_FOUND = "ResourceNotFound"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    SIGNATURE_DOES_NOT_MATCH = "SignatureDoesNotMatch"
    SLOW_DOWN = "SlowDown"
    THROTTLING = "Throttling"
    UNKNOWN = "Unknown"
    UNRECOGNIZED_CLIENT = "UnrecognizedClient"
    VALIDATION = "Validation"


_CODE_TO_CORE_ERROR: dict[str, CoreErrors] = {
    "AccessDenied": CoreErrors.ACCESS_DENIED,
    "AccessDeniedException": CoreErrors.ACCESS_DENIED,
    "IncompleteSignature": CoreErrors.INCOMPLETE_SIGNATURE,
    "IncompleteSignatureException": CoreErrors.INCOMPLETE_SIGNATURE,
    "InternalFailure": CoreErrors.INTERNAL_FAILURE,
    "InternalServerError": CoreErrors.INTERNAL_FAILURE,
    "InternalServerException": CoreErrors.INTERNAL_FAILURE,
    "InvalidAccessKeyId": CoreErrors.INVALID_ACCESS_KEY_ID,
    "InvalidAction": CoreErrors.INVALID_ACTION,
    "InvalidClientTokenId": CoreErrors.INVALID_CLIENT_TOKEN_ID,
    "InvalidParameterCombination": CoreErrors.INVALID_PARAMETER_COMBINATION,
    "InvalidParameterValue": CoreErrors.INVALID_PARAMETER_VALUE,
    "InvalidQueryParameter": CoreErrors.INVALID_QUERY_PARAMETER,
    "InvalidSignatureException": CoreErrors.INVALID_SIGNATURE,
    "MalformedQueryString": CoreErrors.MALFORMED_QUERY_STRING,
    "MissingAction": CoreErrors.MISSING_ACTION,
    "MissingAuthenticationToken": CoreErrors.MISSING_AUTHENTICATION_TOKEN,
    "MissingAuthenticationTokenException": CoreErrors.MISSING_AUTHENTICATION_TOKEN,
    "MissingParameter": CoreErrors.MISSING_PARAMETER,
    "OptInRequired": CoreErrors.OPT_IN_REQUIRED,
    "RequestExpired": CoreErrors.REQUEST_EXPIRED,
    "RequestTimeTooSkewed": CoreErrors.REQUEST_TIME_TOO_SKEWED,
    "RequestTimeout": CoreErrors.REQUEST_TIMEOUT,
    "RequestTimeoutException": CoreErrors.REQUEST_TIMEOUT,
    "ResourceNotFound": CoreErrors.RESOURCE_NOT_FOUND,
    "ResourceNotFoundException": CoreErrors.RESOURCE_NOT_FOUND,
    "ServiceUnavailable": CoreErrors.SERVICE_UNAVAILABLE,
    "ServiceUnavailableException": CoreErrors.SERVICE_UNAVAILABLE,
    "SignatureDoesNotMatch": CoreErrors.SIGNATURE_DOES_NOT_MATCH,
    "SlowDown": CoreErrors.SLOW_DOWN,
    "Throttling": CoreErrors.THROTTLING,
    "ThrottlingException": CoreErrors.THROTTLING,
    "ThrottledException": CoreErrors.THROTTLING,
    "TooManyRequestsException": CoreErrors.THROTTLING,
    "RequestLimitExceeded": CoreErrors.THROTTLING,
    "RequestThrottled": CoreErrors.THROTTLING,
    "RequestThrottledException": CoreErrors.THROTTLING,
    "UnrecognizedClientException": CoreErrors.UNRECOGNIZED_CLIENT,
    "ValidationError": CoreErrors.VALIDATION,
    "ValidationException": CoreErrors.VALIDATION,
}

_RETRYABLE_CORE_ERRORS = frozenset(
    {
        CoreErrors.INTERNAL_FAILURE,
        CoreErrors.NETWORK_CONNECTION,
        CoreErrors.REQUEST_TIMEOUT,
        CoreErrors.REQUEST_TIME_TOO_SKEWED,
        CoreErrors.SERVICE_UNAVAILABLE,
        CoreErrors.SLOW_DOWN,
        CoreErrors.THROTTLING,
    }
)


def core_error_for_code(code: str) -> CoreErrors | None:
    return _CODE_TO_CORE_ERROR.get(code)


def is_retryable_code(code: str, status_code: int | None = None) -> bool:
    core = core_error_for_code(code)
    if core is not None and core in _RETRYABLE_CORE_ERRORS:
        return True
    return status_code is not None and status_code >= 500


@dataclass(frozen=True)
class AWSError:
    """Error half of an outcome.

    ``error_type`` is a :class:`CoreErrors` member when the failure is generic
    (endpoint resolution, missing parameter, throttling, ...) and the raw
    service error code otherwise.
    """

    error_type: CoreErrors | str
    exception_name: str
    message: str
    retryable: bool = False
    response_code: int | None = None
    request_id: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_core(
        cls,
        error_type: CoreErrors,
        message: str,
        *,
        exception_name: str | None = None,
        retryable: bool | None = None,
    ) -> AWSError:
        return cls(
            error_type=error_type,
            exception_name=exception_name or error_type.name,
            message=message,
            retryable=error_type in _RETRYABLE_CORE_ERRORS if retryable is None else retryable,
        )

    @classmethod
    def from_service(
        cls,
        code: str,
        message: str,
        *,
        response_code: int | None = None,
        request_id: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> AWSError:
        core = core_error_for_code(code)
        return cls(
            error_type=core if core is not None else code,
            exception_name=code,
            message=message,
            retryable=is_retryable_code(code, response_code),
            response_code=response_code,
            request_id=request_id,
            headers=dict(headers or {}),
        )

    def __str__(self) -> str:
        return f"{self.exception_name}: {self.message}"

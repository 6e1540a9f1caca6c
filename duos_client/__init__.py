"""Client access layer for the DUOS APIs and their companion services."""

from .config import AppSettings, ConfigurationError
from .errors import (
    ApiHttpError,
    DuosClientError,
    JobError,
    JobFailedError,
    JobTimeoutError,
    TransportError,
    UnknownJobStatusError,
)
from .http import BusyIndicator, DispatchPolicy, HttpClient
from .jobs import JobPoller
from .models import RequestDescriptor, ResponseEnvelope
from .reporting import ErrorReporter
from .services import DuosService, build_service
from .session import HeadlessNavigator, SessionContext, SessionInvalidationInterceptor

__all__ = [
    "ApiHttpError",
    "AppSettings",
    "BusyIndicator",
    "ConfigurationError",
    "DispatchPolicy",
    "DuosClientError",
    "DuosService",
    "ErrorReporter",
    "HeadlessNavigator",
    "HttpClient",
    "JobError",
    "JobFailedError",
    "JobPoller",
    "JobTimeoutError",
    "RequestDescriptor",
    "ResponseEnvelope",
    "SessionContext",
    "SessionInvalidationInterceptor",
    "TransportError",
    "UnknownJobStatusError",
    "build_service",
]

"""Dispatch layer: request pipeline, content negotiation, failure classification."""

from restcore.dispatch.context import RequestContext
from restcore.dispatch.controller import RequestController, RequestHandler
from restcore.dispatch.failures import ErrorClassifier, Failure, FailureKind
from restcore.dispatch.result import OperationResponse
from restcore.dispatch.server import Server

__all__ = [
    "ErrorClassifier",
    "Failure",
    "FailureKind",
    "OperationResponse",
    "RequestContext",
    "RequestController",
    "RequestHandler",
    "Server",
]

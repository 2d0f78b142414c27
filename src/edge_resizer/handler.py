"""Lambda@Edge entry point adapting CloudFront events to the engine."""

from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional

from .core.factories import EngineFactory
from .core.models import EdgeResponse, EngineConfig
from .core.services import ImageTransformEngine

CloudFrontHandler = Callable[[Dict[str, Any], Any], Dict[str, Any]]


def accept_header_value(headers: Dict[str, List[Dict[str, str]]]) -> Optional[str]:
    """Join every Accept header value; None when the client sent none."""
    entries = headers.get("accept") or []
    values = [entry.get("value", "") for entry in entries]
    return ",".join(values) if values else None


def apply_edge_response(
    response: Dict[str, Any], edge_response: EdgeResponse
) -> Dict[str, Any]:
    """Write an EdgeResponse onto a CloudFront response dict."""
    if edge_response.passthrough:
        return response

    response["status"] = str(edge_response.status)
    response["statusDescription"] = edge_response.status_description
    response["body"] = edge_response.body
    headers = response.setdefault("headers", {})
    if edge_response.content_type:
        headers["content-type"] = [
            {"key": "Content-Type", "value": edge_response.content_type}
        ]
    if edge_response.body_encoding:
        response["bodyEncoding"] = edge_response.body_encoding
    return response


def make_handler(engine: ImageTransformEngine) -> CloudFrontHandler:
    """Build a CloudFront handler around an explicitly configured engine."""

    def _handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
        cf = event["Records"][0]["cf"]
        request = cf["request"]
        response = cf["response"]

        edge_response = engine.handle(
            request["uri"],
            request.get("querystring", ""),
            accept_header_value(request.get("headers", {})),
            correlation_id=cf.get("config", {}).get("requestId"),
        )
        return apply_edge_response(response, edge_response)

    return _handler


@lru_cache(maxsize=1)
def _default_handler() -> CloudFrontHandler:
    return make_handler(EngineFactory.create_engine(EngineConfig.load()))


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Lambda entry point; the engine is built once from the packaged config."""
    return _default_handler()(event, context)

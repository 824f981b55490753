"""
Inbound request description and outbound JSON response envelope.

The envelope mirrors the serverless response shape (status, headers,
serialized body, base64 flag) and can also be rendered as a FastAPI Response.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from fastapi import Response

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass(frozen=True)
class InboundRequest:
    """Transport-independent view of an incoming request."""

    path: str
    query: Mapping[str, str] = field(default_factory=dict)
    body: str | None = None
    method: str = "GET"


@dataclass(frozen=True)
class ResponseEnvelope:
    """Status code, headers and serialized JSON body."""

    status_code: int
    headers: Mapping[str, str]
    body: str
    is_base64_encoded: bool = False

    def json(self) -> Any:
        """Decode the serialized body."""
        return json.loads(self.body)

    def to_event(self) -> dict[str, Any]:
        """Render as a serverless function response."""
        return {
            "isBase64Encoded": self.is_base64_encoded,
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
        }

    def to_response(self) -> Response:
        """Render as a FastAPI response."""
        headers = {
            key: value
            for key, value in self.headers.items()
            if key.lower() != "content-type"
        }
        return Response(
            content=self.body,
            status_code=self.status_code,
            headers=headers,
            media_type=JSON_CONTENT_TYPE,
        )


def create_response(
    status_code: int,
    body: Any,
    headers: Mapping[str, str] | None = None,
) -> ResponseEnvelope:
    """Wrap a status code and JSON-serializable body into an envelope."""
    return ResponseEnvelope(
        status_code=status_code,
        headers={"Content-Type": JSON_CONTENT_TYPE, **(headers or {})},
        body=json.dumps(body, separators=(",", ":"), ensure_ascii=False),
    )


def error_response(status_code: int, message: str) -> ResponseEnvelope:
    """Envelope with the ``{"error": message}`` body used for all failures."""
    return create_response(status_code, {"error": message})


DEGRADED_FIELDS_HEADER = "X-Degraded-Fields"


def degraded_headers(fields: list[str]) -> dict[str, str]:
    """Header naming output fields that fell back to defaults, if any."""
    if not fields:
        return {}
    return {DEGRADED_FIELDS_HEADER: ",".join(fields)}

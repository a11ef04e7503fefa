"""Validation of raw oracle JSON before it reaches the domain."""

import json
from typing import Any, List

from pydantic import TypeAdapter, ValidationError

from ...domain.models.interaction import Interaction
from ...domain.models.oracle_result import Err, Ok, OracleResult
from ...domain.ports.analysis_oracle import ExtractedClaim, VerificationOutcome

_extracted_claims = TypeAdapter(List[ExtractedClaim])
_interactions = TypeAdapter(List[Interaction])


def _load(content: Any) -> Any:
    if isinstance(content, (str, bytes)):
        return json.loads(content or "[]")
    return content


def _unwrap(payload: Any, key: str) -> Any:
    """Accept a bare list or an object holding the list under ``key``."""
    if isinstance(payload, dict):
        if key not in payload:
            raise ValueError(f"expected a '{key}' list, got keys {sorted(payload)}")
        return payload[key]
    return payload


def parse_extraction(content: Any) -> OracleResult[List[ExtractedClaim]]:
    """Parse an extraction response."""
    try:
        return Ok(_extracted_claims.validate_python(_unwrap(_load(content), "claims")))
    except (ValueError, ValidationError) as e:
        return Err(f"malformed extraction response: {e}")


def parse_interactions(content: Any) -> OracleResult[List[Interaction]]:
    """Parse a conflict classification response. An empty list is a valid answer."""
    try:
        return Ok(_interactions.validate_python(_unwrap(_load(content), "interactions")))
    except (ValueError, ValidationError) as e:
        return Err(f"malformed classification response: {e}")


def parse_verification(content: Any) -> OracleResult[VerificationOutcome]:
    """Parse a verification response."""
    try:
        return Ok(VerificationOutcome.model_validate(_load(content)))
    except (ValueError, ValidationError) as e:
        return Err(f"malformed verification response: {e}")

"""Response mapping between the wire format and domain entities.

Unwraps the response envelope, validates payloads into wire DTOs and converts
them to domain entities. Required fields that are missing or malformed raise
``DecodingError``; auxiliary fields (JSON-string columns, enum spellings,
timestamps) degrade to a default and log a ``lenient_decode_fallback`` warning
so bad backend data stays observable.
"""

import json
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, NamedTuple, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_snake

from src.pulse.api.response_models import (
    APIResponse,
    DashboardDTO,
    EndpointDTO,
    HealthSummaryDTO,
    IncidentDTO,
    IncidentStatsDTO,
    IncidentWithTimelineDTO,
    ProbeResultDTO,
    ProbeStatsDTO,
    TimelineEntryDTO,
    UserDTO,
)
from src.pulse.config.logging import get_logger
from src.pulse.constants import (
    FALLBACK_EXPECTED_STATUS_CODES,
    MAX_PROBE_INTERVAL_MINUTES,
    MIN_PROBE_INTERVAL_MINUTES,
)
from src.pulse.errors import DecodingError
from src.pulse.models.dashboard import DashboardData, DashboardEndpoint
from src.pulse.models.endpoint import Endpoint, EndpointHealthSummary, EndpointStatus, HTTPMethod
from src.pulse.models.incident import (
    Incident,
    IncidentDetail,
    IncidentSeverity,
    IncidentStats,
    IncidentStatus,
    IncidentTimelineEntry,
    IncidentType,
)
from src.pulse.models.probe import ProbeResult, ProbeResultStatus, ProbeStatistics
from src.pulse.models.user import User

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
EnumT = TypeVar("EnumT", bound=Enum)


class Decoded(NamedTuple):
    """Result of a lenient decode: the value and whether a fallback was used."""

    value: Any
    used_fallback: bool


def _fallback(field_name: str, raw: Any, value: Any, reason: str) -> Decoded:
    logger.warning(
        "lenient_decode_fallback",
        field=field_name,
        raw=repr(raw)[:200],
        fallback=repr(value),
        reason=reason,
    )
    return Decoded(value, True)


# ============================================================================
# Envelope
# ============================================================================


def parse_envelope(raw: bytes) -> APIResponse:
    """Parse raw response bytes into the response envelope.

    Args:
        raw: Response body

    Returns:
        Parsed envelope

    Raises:
        DecodingError: If the body is not JSON or not an envelope
    """
    try:
        payload = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodingError("invalid JSON", details={"error": str(e)}) from e

    if not isinstance(payload, dict):
        raise DecodingError("response envelope is not an object")

    return decode_model(APIResponse, payload)


def unwrap(raw: bytes) -> Any | None:
    """Return the envelope payload, or None when the response carries no data.

    A response has no data when ``success`` is false or ``data`` is null.
    """
    envelope = parse_envelope(raw)
    if not envelope.has_data:
        logger.info(
            "response_without_data",
            success=envelope.success,
            error=envelope.error,
        )
        return None
    return envelope.data


def decode_model(model: type[ModelT], data: Any) -> ModelT:
    """Validate a payload into a wire DTO.

    Raises:
        DecodingError: If validation fails
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DecodingError(
            f"invalid {model.__name__}",
            details={"model": model.__name__, "error_count": e.error_count()},
        ) from e


def decode_model_list(model: type[ModelT], data: Any) -> list[ModelT]:
    """Validate a list payload item by item.

    Raises:
        DecodingError: If the payload is not a list or an item is invalid
    """
    if not isinstance(data, list):
        raise DecodingError(
            f"expected a list of {model.__name__}",
            details={"model": model.__name__, "type": type(data).__name__},
        )
    return [decode_model(model, item) for item in data]


# ============================================================================
# Lenient field decoders
# ============================================================================


def _load_json(raw: Any) -> Any:
    if isinstance(raw, (str, bytes)):
        return json.loads(raw)
    return raw


def decode_status_codes(raw: Any, field_name: str = "expected_status_codes") -> Decoded:
    """Decode a JSON array of status codes; falls back to ``[200]``."""
    fallback = list(FALLBACK_EXPECTED_STATUS_CODES)
    try:
        codes = _load_json(raw)
    except ValueError:
        return _fallback(field_name, raw, fallback, "invalid JSON")

    if not isinstance(codes, list) or not codes:
        return _fallback(field_name, raw, fallback, "missing or empty")
    if not all(isinstance(code, int) and not isinstance(code, bool) for code in codes):
        return _fallback(field_name, raw, fallback, "non-integer status code")
    return Decoded(codes, False)


def decode_probe_interval(raw: int, field_name: str = "probe_interval_minutes") -> Decoded:
    """Clamp a probe interval into the supported range."""
    clamped = min(max(raw, MIN_PROBE_INTERVAL_MINUTES), MAX_PROBE_INTERVAL_MINUTES)
    if clamped != raw:
        return _fallback(field_name, raw, clamped, "out of range")
    return Decoded(raw, False)


def decode_headers(raw: Any, field_name: str = "headers") -> Decoded:
    """Decode a JSON object of headers; None stays None, bad data becomes ``{}``."""
    if raw is None:
        return Decoded(None, False)
    try:
        headers = _load_json(raw)
    except ValueError:
        return _fallback(field_name, raw, {}, "invalid JSON")

    if not isinstance(headers, dict):
        return _fallback(field_name, raw, {}, "not an object")
    return Decoded({str(k): str(v) for k, v in headers.items()}, False)


def decode_regions(raw: Any, field_name: str = "affected_regions") -> Decoded:
    """Decode a JSON array of region tags; missing or bad data becomes ``[]``."""
    if raw is None:
        return Decoded([], False)
    try:
        regions = _load_json(raw)
    except ValueError:
        return _fallback(field_name, raw, [], "invalid JSON")

    if not isinstance(regions, list):
        return _fallback(field_name, raw, [], "not a list")
    return Decoded([str(region) for region in regions], False)


def decode_enum(
    enum_cls: type[EnumT],
    raw: Any,
    default: EnumT,
    field_name: str | None = None,
) -> Decoded:
    """Decode an enum value accepting snake_case or camelCase spellings.

    Args:
        enum_cls: Target enum
        raw: Raw wire value
        default: Value used when ``raw`` is missing or unknown
        field_name: Field name for the fallback log

    Returns:
        Decoded enum member
    """
    field_name = field_name or enum_cls.__name__
    if not isinstance(raw, str) or not raw:
        return _fallback(field_name, raw, default, "missing")

    for candidate in (raw, to_snake(raw), raw.lower(), raw.upper()):
        try:
            return Decoded(enum_cls(candidate), False)
        except ValueError:
            continue
    return _fallback(field_name, raw, default, "unknown value")


def _parse_iso(raw: str) -> datetime:
    value = raw.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def decode_timestamp(raw: Any, field_name: str = "timestamp") -> Decoded:
    """Decode an ISO-8601 timestamp; missing or unparsable values become now.

    Naive timestamps are treated as UTC.
    """
    if not isinstance(raw, str) or not raw:
        return _fallback(field_name, raw, datetime.now(timezone.utc), "missing")
    try:
        return Decoded(_parse_iso(raw), False)
    except ValueError:
        return _fallback(field_name, raw, datetime.now(timezone.utc), "unparsable")


def decode_optional_timestamp(raw: Any, field_name: str = "timestamp") -> Decoded:
    """Like ``decode_timestamp`` but missing values stay None."""
    if raw is None or raw == "":
        return Decoded(None, False)
    return decode_timestamp(raw, field_name)


def _build(entity: type, **fields: Any) -> Any:
    try:
        return entity(**fields)
    except ValueError as e:
        raise DecodingError(
            f"invalid {entity.__name__}: {e}",
            details={"entity": entity.__name__},
        ) from e


# ============================================================================
# Endpoint mapping
# ============================================================================


def endpoint_from_dto(dto: EndpointDTO) -> Endpoint:
    """Convert an endpoint row to the domain entity."""
    return _build(
        Endpoint,
        id=dto.id,
        name=dto.name,
        url=dto.url,
        method=decode_enum(HTTPMethod, dto.method, HTTPMethod.GET, "method").value,
        headers=decode_headers(dto.headers).value,
        body=dto.body,
        probe_interval_minutes=decode_probe_interval(dto.probe_interval_minutes).value,
        timeout_seconds=dto.timeout_seconds,
        expected_status_codes=decode_status_codes(dto.expected_status_codes).value,
        is_active=dto.is_active == 1,
        created_at=decode_timestamp(dto.created_at, "created_at").value,
        updated_at=decode_timestamp(dto.updated_at, "updated_at").value,
    )


def endpoint_to_wire(endpoint: Endpoint) -> EndpointDTO:
    """Encode an endpoint in its wire shape (JSON-string columns, integer flag)."""
    return EndpointDTO(
        id=endpoint.id,
        name=endpoint.name,
        url=endpoint.url,
        method=endpoint.method.value,
        headers=json.dumps(endpoint.headers) if endpoint.headers is not None else None,
        body=endpoint.body,
        probe_interval_minutes=endpoint.probe_interval_minutes,
        timeout_seconds=endpoint.timeout_seconds,
        expected_status_codes=json.dumps(list(endpoint.expected_status_codes)),
        is_active=1 if endpoint.is_active else 0,
        created_at=endpoint.created_at.isoformat(),
        updated_at=endpoint.updated_at.isoformat(),
    )


def health_from_dto(dto: HealthSummaryDTO) -> EndpointHealthSummary:
    """Convert a health summary payload to the domain entity."""
    return _build(
        EndpointHealthSummary,
        endpoint_id=dto.endpoint_id,
        status=decode_enum(EndpointStatus, dto.status, EndpointStatus.UNKNOWN, "status").value,
        reliability_score=dto.reliability_score,
        error_rate=dto.error_rate,
        uptime_percentage=dto.uptime_percentage,
        current_latency_ms=dto.current_latency_ms,
        baseline_latency_ms=dto.baseline_latency_ms,
        last_probe_at=decode_optional_timestamp(dto.last_probe_at, "last_probe_at").value,
        last_incident_at=decode_optional_timestamp(dto.last_incident_at, "last_incident_at").value,
    )


# ============================================================================
# Incident mapping
# ============================================================================


def incident_from_dto(dto: IncidentDTO) -> Incident:
    """Convert an incident row, normalising an inconsistent resolved state.

    A resolved row without ``resolved_at`` takes ``updated_at`` as its
    resolution time; an unresolved row carrying ``resolved_at`` drops it.
    """
    status = decode_enum(IncidentStatus, dto.status, IncidentStatus.ACTIVE, "status").value
    updated_at = decode_timestamp(dto.updated_at, "updated_at").value
    resolved_at = decode_optional_timestamp(dto.resolved_at, "resolved_at").value

    if status is IncidentStatus.RESOLVED and resolved_at is None:
        resolved_at = _fallback(
            "resolved_at", None, updated_at, "resolved without resolved_at"
        ).value
    elif status is not IncidentStatus.RESOLVED and resolved_at is not None:
        resolved_at = _fallback(
            "resolved_at", dto.resolved_at, None, "set on unresolved incident"
        ).value

    return _build(
        Incident,
        id=dto.id,
        endpoint_id=dto.endpoint_id,
        type=decode_enum(IncidentType, dto.type, IncidentType.LATENCY_SPIKE, "type").value,
        severity=decode_enum(
            IncidentSeverity, dto.severity, IncidentSeverity.MINOR, "severity"
        ).value,
        status=status,
        started_at=decode_timestamp(dto.started_at, "started_at").value,
        resolved_at=resolved_at,
        title=dto.title,
        description=dto.description,
        affected_regions=decode_regions(dto.affected_regions).value,
        created_at=decode_timestamp(dto.created_at, "created_at").value,
        updated_at=updated_at,
    )


def timeline_entry_from_dto(dto: TimelineEntryDTO) -> IncidentTimelineEntry:
    return IncidentTimelineEntry(
        id=dto.id,
        incident_id=dto.incident_id,
        status=decode_enum(IncidentStatus, dto.status, IncidentStatus.ACTIVE, "status").value,
        message=dto.message,
        timestamp=decode_timestamp(dto.timestamp).value,
    )


def incident_detail_from_dto(dto: IncidentWithTimelineDTO) -> IncidentDetail:
    """Convert an incident with its timeline, ordered by timestamp ascending."""
    timeline = sorted(
        (timeline_entry_from_dto(entry) for entry in dto.timeline),
        key=lambda entry: entry.timestamp,
    )
    return IncidentDetail(incident=incident_from_dto(dto.incident), timeline=timeline)


def incident_stats_from_dto(dto: IncidentStatsDTO) -> IncidentStats:
    return IncidentStats(
        total=dto.total,
        active=dto.active,
        resolved=dto.resolved,
        critical=dto.critical,
        major=dto.major,
        minor=dto.minor,
    )


# ============================================================================
# Probe mapping
# ============================================================================


def probe_result_from_dto(dto: ProbeResultDTO) -> ProbeResult:
    return ProbeResult(
        id=dto.id,
        endpoint_id=dto.endpoint_id,
        timestamp=decode_timestamp(dto.timestamp).value,
        status=decode_enum(
            ProbeResultStatus, dto.status, ProbeResultStatus.ERROR, "status"
        ).value,
        region=dto.region,
        latency_ms=dto.latency_ms,
        status_code=dto.status_code,
        error_message=dto.error_message,
    )


def probe_stats_from_dto(
    dto: ProbeStatsDTO,
    endpoint_id: str,
    hours: int,
    now: datetime | None = None,
) -> ProbeStatistics:
    """Convert probe statistics for the trailing ``hours`` window ending now.

    The backend does not echo the endpoint or the window, so both come from
    the request.
    """
    period_end = now or datetime.now(timezone.utc)
    return ProbeStatistics(
        endpoint_id=endpoint_id,
        period_start=period_end - timedelta(hours=hours),
        period_end=period_end,
        total_probes=dto.total_probes,
        success_count=dto.success_count,
        error_count=dto.error_count,
        timeout_count=dto.timeout_count,
        average_latency_ms=dto.avg_latency_ms,
        p50_latency_ms=dto.p50_latency_ms,
        p95_latency_ms=dto.p95_latency_ms,
        p99_latency_ms=dto.p99_latency_ms,
        min_latency_ms=dto.min_latency_ms,
        max_latency_ms=dto.max_latency_ms,
    )


# ============================================================================
# Dashboard and user mapping
# ============================================================================


def dashboard_from_dto(dto: DashboardDTO) -> DashboardData:
    """Convert the dashboard summary; rows without health report UNKNOWN."""
    endpoints = [
        DashboardEndpoint(
            id=row.endpoint.id,
            name=row.endpoint.name,
            health=health_from_dto(row.health) if row.health is not None else None,
        )
        for row in dto.endpoints
    ]
    return DashboardData(
        overall_health=dto.overall_health,
        endpoint_count=dto.endpoint_count,
        healthy_count=dto.healthy_count,
        degraded_count=dto.degraded_count,
        down_count=dto.down_count,
        active_incident_count=dto.active_incident_count,
        endpoints=endpoints,
        recent_incidents=[incident_from_dto(incident) for incident in dto.recent_incidents],
    )


def user_from_dto(dto: UserDTO) -> User:
    return User(
        id=dto.id,
        email=dto.email,
        subscription_status=dto.subscription_status,
        created_at=decode_timestamp(dto.created_at, "created_at").value,
        subscription_expires_at=decode_optional_timestamp(
            dto.subscription_expires_at, "subscription_expires_at"
        ).value,
        endpoint_count=dto.endpoint_count,
    )

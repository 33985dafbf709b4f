"""Persisted override snapshot format.

The snapshot is a JSON array of override records stored under a single
key. The derived ``isExpiringSoon`` flag is never written and is ignored
when present on input.

Wire format:
    [
        {
            "id": "3f2a...",
            "serviceId": "order-api",
            "serviceName": "Order Processing API",
            "envId": "prod",
            "level": "DEBUG",
            "startTime": 1767225600000,
            "expiryTime": 1767225720000,
            "totalDuration": 120000
        }
    ]
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from logflow.domain.errors.override import OverrideValidationError
from logflow.domain.errors.sync import SnapshotDecodeError
from logflow.domain.models.log_level import LogLevel
from logflow.domain.models.override import Override


class OverrideRecord(BaseModel):
    """Serialized form of an Override."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = Field(min_length=1)
    service_id: str = Field(alias="serviceId", min_length=1)
    service_name: str = Field(alias="serviceName", default="")
    env_id: str = Field(alias="envId", min_length=1)
    level: LogLevel
    start_time: int = Field(alias="startTime")
    expiry_time: int = Field(alias="expiryTime")
    total_duration: int = Field(alias="totalDuration")

    @classmethod
    def from_override(cls, override: Override) -> OverrideRecord:
        return cls(
            id=override.id,
            service_id=override.service_id,
            service_name=override.service_name,
            env_id=override.env_id,
            level=override.level,
            start_time=override.start_time,
            expiry_time=override.expiry_time,
            total_duration=override.total_duration,
        )

    def to_override(self) -> Override:
        return Override(
            id=self.id,
            service_id=self.service_id,
            service_name=self.service_name or self.service_id,
            env_id=self.env_id,
            level=self.level,
            start_time=self.start_time,
            expiry_time=self.expiry_time,
            total_duration=self.total_duration,
        )


_RECORDS = TypeAdapter(list[OverrideRecord])


def encode_snapshot(overrides: Iterable[Override]) -> str:
    """Serialize overrides to the compact persisted JSON form."""
    records = [
        OverrideRecord.from_override(o).model_dump(mode="json", by_alias=True)
        for o in overrides
    ]
    return json.dumps(records, separators=(",", ":"))


def decode_snapshot(raw: str) -> list[Override]:
    """Parse a persisted snapshot.

    Args:
        raw: JSON text as stored.

    Returns:
        Overrides in stored order, derived flags unset.

    Raises:
        SnapshotDecodeError: If the text is not valid JSON, not an array,
            or any record fails validation.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise SnapshotDecodeError(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise SnapshotDecodeError(
            f"Snapshot must be a JSON array, got {type(data).__name__}"
        )

    try:
        records = _RECORDS.validate_python(data)
        return [record.to_override() for record in records]
    except ValidationError as e:
        raise SnapshotDecodeError(
            f"Snapshot record failed validation: {e.error_count()} error(s)"
        ) from e
    except OverrideValidationError as e:
        raise SnapshotDecodeError(f"Snapshot record violates invariant: {e}") from e

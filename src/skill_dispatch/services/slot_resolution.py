"""Entity resolution status for intent slots.

Slots whose type has a value list carry a ``resolutions`` object:

    {"resolutionsPerAuthority": [
        {"authority": "...", "status": {"code": "ER_SUCCESS_MATCH"},
         "values": [{"value": {"name": "...", "id": "..."}}]}
    ]}

The shape is owned by the platform, so it is parsed leniently: a missing or
unrecognizable top level means the platform did not check the value
(``UNVERIFIED``), a broken authority record means ``UNKNOWN``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, StrictStr, ValidationError

if TYPE_CHECKING:
    from ..models.request import IntentSlot

MATCH_CODE = "ER_SUCCESS_MATCH"
NO_MATCH_CODE = "ER_SUCCESS_NO_MATCH"


class ResolutionStatus(str, Enum):
    """Platform verdict on a slot value."""

    UNKNOWN = "unknown"
    FOUND = "found"
    NOT_FOUND = "not_found"
    UNVERIFIED = "unverified"


class _StatusCode(BaseModel):
    code: StrictStr


class _ResolvedName(BaseModel):
    name: StrictStr


class _ResolvedValue(BaseModel):
    value: _ResolvedName


class _AuthorityResolution(BaseModel):
    status: _StatusCode
    values: Any = None


class _Resolutions(BaseModel):
    resolutionsPerAuthority: list[Any]


@dataclass(frozen=True)
class Absent:
    """No resolution data, or a top level that is not a resolution object."""


@dataclass(frozen=True)
class Malformed:
    """Resolution object with an unusable authority record."""


@dataclass(frozen=True)
class Resolved:
    code: str
    authorities: tuple[_AuthorityResolution, ...] = ()


ParsedResolutions = Absent | Malformed | Resolved


def parse_resolutions(resolutions: Any) -> ParsedResolutions:
    """Parse the raw ``resolutions`` value without raising."""
    try:
        top = _Resolutions.model_validate(resolutions)
    except ValidationError:
        return Absent()

    if not top.resolutionsPerAuthority:
        return Malformed()

    authorities = []
    for record in top.resolutionsPerAuthority:
        try:
            authorities.append(_AuthorityResolution.model_validate(record))
        except ValidationError:
            return Malformed()

    # A match from any authority wins (custom values and dynamic entities
    # are reported as separate authorities)
    for authority in authorities:
        if authority.status.code == MATCH_CODE:
            return Resolved(code=MATCH_CODE, authorities=tuple(authorities))

    return Resolved(code=authorities[0].status.code, authorities=tuple(authorities))


def resolution_status(resolutions: Any) -> ResolutionStatus:
    """Compute the resolution status of a slot's raw ``resolutions`` value."""
    parsed = parse_resolutions(resolutions)

    if isinstance(parsed, Absent):
        return ResolutionStatus.UNVERIFIED
    if isinstance(parsed, Malformed):
        return ResolutionStatus.UNKNOWN
    if parsed.code == MATCH_CODE:
        return ResolutionStatus.FOUND
    if parsed.code == NO_MATCH_CODE:
        return ResolutionStatus.NOT_FOUND
    return ResolutionStatus.UNKNOWN


def is_valid_status(status: ResolutionStatus) -> bool:
    """A value is usable if it matched the value list or no list applies."""
    return status in (ResolutionStatus.FOUND, ResolutionStatus.UNVERIFIED)


def resolved_value(slot: "IntentSlot") -> str:
    """Return the canonical value name of a matched slot, else the raw value."""
    parsed = parse_resolutions(slot.resolutions)
    if not isinstance(parsed, Resolved):
        return slot.value

    for authority in parsed.authorities:
        if authority.status.code != MATCH_CODE:
            continue
        values = authority.values if isinstance(authority.values, list) else []
        for entry in values:
            try:
                return _ResolvedValue.model_validate(entry).value.name
            except ValidationError:
                continue

    return slot.value

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict

from activity_relay.topics.resolver import TopicResolution


class ActivityPayload(BaseModel):
    """JSON body posted by the tracking client."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    page: Optional[str] = None
    event_description: Optional[str] = None
    klartekst_input: Optional[str] = None
    session_uid: Optional[str] = None


class ActivityEvent(BaseModel):
    page: Optional[str] = None
    event_description: Optional[str] = None
    klartekst_input: Optional[str] = None
    ip_adresse: str
    session_uid: Optional[str] = None


@dataclass(frozen=True)
class RelayResult:
    session_uid: str
    ip_adresse: str
    is_new_ip: bool
    resolution: TopicResolution

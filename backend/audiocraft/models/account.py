"""
AudioCraft Backend: Account Model
=================================

What:  The single entity the service keeps: identity plus entitlement state.
How:   A plain dataclass held by an AccountStore (see audiocraft/database.py).
       The store owns the instances; services mutate them only through
       store operations.

Field notes:
    id:               uuid4 string, assigned at creation, never reused
    email:            unique key, compared case-sensitively as typed at signup
    password_hash:    passlib hash string; never serialized to clients
    free_tracks_left: starts at settings.free_tracks, never below 0
    subscription:     SubscriptionStatus; only NONE and ACTIVE are modeled
    created_at:       UTC timestamp of signup
"""

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


class SubscriptionStatus(str, enum.Enum):
    NONE = "none"
    ACTIVE = "active"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Account:
    email: str
    password_hash: str
    free_tracks_left: int
    subscription: SubscriptionStatus = SubscriptionStatus.NONE
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def has_active_subscription(self) -> bool:
        return self.subscription == SubscriptionStatus.ACTIVE

    def __repr__(self) -> str:
        return (
            f"<Account(id={self.id}, email={self.email!r}, "
            f"free_tracks_left={self.free_tracks_left}, "
            f"subscription={self.subscription.value})>"
        )

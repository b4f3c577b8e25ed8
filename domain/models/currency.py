from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class RateEntry:
    base: str
    target: str
    rate: float
    updated_at: datetime

    def __post_init__(self):
        if self.rate <= 0:
            raise ValueError(f"Rate for {self.base} -> {self.target} must be positive")


@dataclass(frozen=True)
class UserProfile:
    user_id: str
    base_currency: str
    created_at: datetime
    updated_at: datetime
    favorites: list[str] = field(default_factory=list)

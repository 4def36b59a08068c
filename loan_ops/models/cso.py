"""Customer Service Officer (field agent) model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Cso:
    """Field agent who originates loans and collects repayments."""

    cso_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    branch: str
    work_id: str
    created_at: datetime
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum


class ComponentType(StrEnum):
    BUTTON = "button"
    SELECT_MENU = "select_menu"


@dataclass(frozen=True)
class ComponentInteraction:
    session_id: str
    user_id: int                           # acting user
    custom_id: str                         # raw action tag, see models.action
    component_type: ComponentType = ComponentType.BUTTON
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

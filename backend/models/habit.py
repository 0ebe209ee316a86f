import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, Boolean
from sqlalchemy.orm import relationship
from database import Base

# Order matters: the first entry is the default color
PRESET_COLORS = (
    "#10B981",  # emerald
    "#8B5CF6",  # purple
    "#F59E0B",  # orange
    "#3B82F6",  # blue
    "#EF4444",  # red
    "#EC4899",  # pink
    "#14B8A6",  # teal
    "#F97316",  # deep orange
)
DEFAULT_COLOR = PRESET_COLORS[0]
NAME_MAX_LENGTH = 50


class Habit(Base):
    __tablename__ = "habits"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(7), nullable=False, default=DEFAULT_COLOR)
    icon = Column(String(50), nullable=True)  # never populated
    archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    logs = relationship("HabitLog", back_populates="habit", passive_deletes=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "color": self.color,
            "icon": self.icon,
            "archived": self.archived,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

"""
Meal log model.
"""

import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base


class Meal(Base):
    """A meal logged by its owner, flagged on-diet or off-diet"""

    __tablename__ = "meal"

    meal_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)  # stored as UTC
    is_on_diet = Column(Boolean, nullable=False)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("AppUser", back_populates="meals")

    __table_args__ = (Index("ix_meal_user_date", "user_id", "date"),)

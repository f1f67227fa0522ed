import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Travel(Base):
    __tablename__ = "travels"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), index=True, nullable=False
    )
    destination: Mapped[str] = mapped_column(String(255), nullable=False)
    budget: Mapped[float] = mapped_column(Float, nullable=False)
    nights: Mapped[int] = mapped_column(Integer, nullable=False)
    # Assigned by the travel service at save time
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

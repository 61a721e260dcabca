from datetime import datetime, timezone
from sqlalchemy import DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from app.models.wish_model import AttendingStatus
from app.services.database import Base


class Wish(Base):
    __tablename__ = "wishes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    message: Mapped[str] = mapped_column(String(500), nullable=False)
    attending: Mapped[AttendingStatus] = mapped_column(
        Enum(AttendingStatus, name="attending_status"), nullable=False
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self):
        return f"<Wish id={self.id} name={self.name!r} attending={self.attending.value}>"

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, String, Text

from .database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(String(36), primary_key=True, default=_new_id)
    company = Column(String, nullable=False, index=True)
    position = Column(String, nullable=False, index=True)
    position_type = Column(String, nullable=False, default="Unknown")
    location = Column(String, nullable=False, default="Unknown")
    date_applied = Column(Date, nullable=True)
    link = Column(Text, nullable=False, default="")
    status = Column(String, nullable=False, default="Applied")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    def __repr__(self):
        return f"<JobApplication {self.id} {self.company!r} / {self.position!r}>"

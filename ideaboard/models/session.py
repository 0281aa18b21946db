"""Session model — server-side session rows keyed by the cookie id."""

from datetime import datetime
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from ideaboard.database import Base


class Session(Base):
    __tablename__ = "sessions"

    sid: Mapped[str] = mapped_column(String(64), primary_key=True)
    sess: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    expire: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), index=True, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Session {self.sid[:8]}... expires={self.expire}>"

from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class URLItem(Base):
    __tablename__ = "urls"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Original URL: unique so a concurrent duplicate shorten request fails its insert
    original_url = Column(Text, nullable=False, unique=True)

    # First SHORT_CODE_LENGTH chars of the URL digest, longer only after a collision
    short_code = Column(String(32), nullable=False, unique=True, index=True)

    # NULLs never collide, so the constraint only binds records that set one
    alias = Column(String(30), nullable=True, unique=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    access_count = Column(Integer, nullable=False, default=0)
    last_accessed_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def path(self) -> str:
        return self.alias or self.short_code

    def __repr__(self):
        return f"<URLItem id={self.id} short_code={self.short_code!r} alias={self.alias!r}>"

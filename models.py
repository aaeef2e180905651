from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, Index
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement
from database import Base


def utcnow():
    return datetime.now(timezone.utc)


class click_timestamp(FunctionElement):
    """Time of the UPDATE itself, taken by the database when the row is written."""
    type = DateTime(timezone=True)
    inherit_cache = True


@compiles(click_timestamp)
def _click_timestamp_default(element, compiler, **kw):
    return "CURRENT_TIMESTAMP"


@compiles(click_timestamp, "postgresql")
def _click_timestamp_postgresql(element, compiler, **kw):
    # now() is the transaction start time, clock_timestamp() the time of the write
    return "clock_timestamp()"


class Link(Base):
    __tablename__ = "links"
    id = Column(Integer, primary_key=True)
    code = Column(String(8), unique=True, index=True, nullable=False)
    url = Column(Text, nullable=False)
    clicks = Column(Integer, default=0, nullable=False)
    last_clicked = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_links_created_at_desc", created_at.desc()),
    )

    def __repr__(self):
        return f"<Link {self.code} -> {self.url} ({self.clicks} clicks)>"

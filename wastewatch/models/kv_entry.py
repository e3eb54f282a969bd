"""
Key-value entry model backing the snapshot storage
"""
from datetime import datetime

from sqlalchemy import DateTime, Integer, LargeBinary, String, func
from sqlalchemy.orm import Mapped, mapped_column

from wastewatch.database import Base


class KeyValueEntry(Base):
    """One stored blob per key, with a version bumped on every write"""
    
    __tablename__ = "kv_store"
    
    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    version: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    
    def __repr__(self) -> str:
        return f"<KeyValueEntry {self.key} v{self.version}>"

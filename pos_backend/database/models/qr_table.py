"""
QrTable - a dining table with the payload printed on its QR sticker
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from datetime import datetime, timezone
from pos_backend.database.base import Base
from config import QR_MENU_BASE_URL


class QrTable(Base):
    __tablename__ = "qr_tables"

    id = Column(Integer, primary_key=True, index=True)
    table_number = Column(Integer, unique=True, nullable=False, index=True)
    qr_code = Column(String(500), nullable=False)  # text payload, no image
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    @staticmethod
    def menu_url_for(table_number: int, base_url: str = QR_MENU_BASE_URL) -> str:
        return f"{base_url}?table={table_number}"

    def __repr__(self):
        return f"<QrTable {self.table_number}>"

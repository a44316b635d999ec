"""
User database model - owners and till staff who sign in to the system
"""
from sqlalchemy import Column, Integer, String, DateTime, Enum as SQLAlchemyEnum
from sqlalchemy.orm import relationship, validates
from datetime import datetime, timezone
from enum import StrEnum
from pos_backend.database.base import Base
from pos_backend.core.i18n_logger import get_i18n_logger

logger = get_i18n_logger("user_model")


class UserRole(StrEnum):
    """User roles in the restaurant system"""
    OWNER = "owner"
    STAFF = "staff"


class User(Base):
    """
    Account used to sign in to the POS.

    The first account registered becomes the OWNER; everybody after that
    is STAFF until promoted. Owners manage staff records and salaries.
    """
    __tablename__ = "users"

    # === Core Identity ===
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(100), nullable=False)

    # === Role and Permissions ===
    role = Column(SQLAlchemyEnum(UserRole), nullable=False, default=UserRole.STAFF, index=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # === Relationships ===
    orders = relationship("Order", back_populates="creator")
    expenses = relationship("Expense", back_populates="creator")

    def is_owner(self) -> bool:
        return self.role == UserRole.OWNER

    @validates('email')
    def validate_email(self, key, value):
        """Basic email validation"""
        if '@' not in value or '.' not in value:
            logger.error("error.validation", field="email", message=f"Invalid email format: {value}")
            raise ValueError("Invalid email format")
        return value.lower()

    def __repr__(self):
        return f"<User {self.username} ({self.role.value})>"

from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime, timezone

from marketplace.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    email = Column(String(255), nullable=False, unique=True)
    role = Column(String(10), nullable=False, default="buyer")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

# marketplace/data/models/item.py
from sqlalchemy import Column, Integer, ForeignKey, String, Text, Numeric, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from marketplace.data.database import Base


class ItemModel(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    seller_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(50), nullable=True, index=True)
    condition = Column(String(50), nullable=True)
    image_url = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    seller = relationship("UserModel", lazy="joined")

    @property
    def seller_name(self) -> str | None:
        return self.seller.username if self.seller else None

from sqlalchemy import Boolean, Column, String, ForeignKey

from app.database import Base


class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    tier = Column(String, nullable=False, default="free")
    is_active = Column(Boolean, nullable=False, default=True)
    period_end = Column(String, nullable=True)
    created_at = Column(String, nullable=False)

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from datetime import datetime
from database import Base


class User(Base):
    """
    User subscription state.
    Rows are created by the account subsystem; this service only flips the two flags.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=True, index=True)
    # RevenueCat app_user_id, stored verbatim when the account subsystem knows it
    revenuecat_app_user_id = Column(String, unique=True, nullable=True, index=True)
    has_trial = Column(Boolean, default=True, nullable=False)
    is_subscribed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

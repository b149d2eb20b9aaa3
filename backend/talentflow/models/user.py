from sqlalchemy import Column, Integer, String

from talentflow.db.base import Base


class User(Base):
    """Back-office user that can sign in to the tracker."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String)
    role = Column(String, index=True)  # 'admin' | 'hr'

from ..base import Base
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    email = Column(String, unique=True, nullable=False)
    password = Column(String, nullable=False)
    name = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)

    # No cascade; the database refuses to drop a user who still owns tasks
    tasks = relationship("Task", back_populates="user", passive_deletes="all")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"

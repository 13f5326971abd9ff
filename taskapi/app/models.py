from sqlalchemy import Column, Integer, Text

from .db import Base


class Task(Base):
    __tablename__ = "task"
    # AUTOINCREMENT: ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    task = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"Task(id={self.id!r}, task={self.task!r})"

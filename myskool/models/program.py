from sqlalchemy import Column, Date, ForeignKey, Integer, LargeBinary, String
from sqlalchemy.orm import relationship

from myskool.database import Base


class Program(Base):
    __tablename__ = "program"

    id = Column(Integer, primary_key=True, index=True)

    cover = Column(LargeBinary, nullable=True)
    cover_content_type = Column(String(255), nullable=True)

    title = Column(String(30), nullable=False)
    description = Column(String(300), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    tags = Column(String(255), nullable=True)

    # owner, set to the authenticated user on create
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    user = relationship("User")

    def __repr__(self):
        return (
            f"Program(id={self.id!r}, title={self.title!r}, "
            f"start_date={self.start_date!r}, end_date={self.end_date!r}, tags={self.tags!r})"
        )

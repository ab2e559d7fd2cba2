from sqlalchemy import Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from jobboard.database import Base


class Application(Base):
    __tablename__ = "applications"

    id = Column(Text, primary_key=True)
    job_id = Column(Text, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text)
    message = Column(Text, nullable=False)
    resume_url = Column(Text)
    created_at = Column(Text, nullable=False)

    job = relationship("Job", back_populates="applications")

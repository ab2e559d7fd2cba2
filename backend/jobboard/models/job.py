from sqlalchemy import Boolean, Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from jobboard.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    slug = Column(Text, nullable=False, unique=True)
    title = Column(Text, nullable=False)
    company_name = Column(Text, nullable=False)
    company_email = Column(Text, nullable=False)
    company_logo_url = Column(Text)
    location_city = Column(Text, nullable=False)
    location_state = Column(Text, nullable=False)
    job_type = Column(Text, nullable=False)
    pay_min = Column(Integer)
    pay_max = Column(Integer)
    pay_type = Column(Text)
    description = Column(Text, nullable=False)
    requirements = Column(Text)
    how_to_apply = Column(Text)
    is_featured = Column(Boolean, nullable=False, default=False)
    status = Column(Text, nullable=False, default="active")
    manage_token_hash = Column(Text, nullable=False)
    expires_at = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    trades = relationship("JobTrade", back_populates="job", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")

    @property
    def trade_names(self) -> list[str]:
        return sorted(t.trade for t in self.trades)


class JobTrade(Base):
    __tablename__ = "job_trades"

    job_id = Column(Text, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True)
    trade = Column(Text, primary_key=True)

    job = relationship("Job", back_populates="trades")

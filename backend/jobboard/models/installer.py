from sqlalchemy import Boolean, Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from jobboard.database import Base


class Installer(Base):
    __tablename__ = "installers"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    bio = Column(Text, nullable=False)
    location_city = Column(Text, nullable=False)
    location_state = Column(Text, nullable=False)
    years_experience = Column(Integer)
    is_available = Column(Boolean, nullable=False, default=True)
    avatar_url = Column(Text)
    manage_token_hash = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    specialties = relationship(
        "InstallerSpecialty", back_populates="installer", cascade="all, delete-orphan"
    )

    @property
    def specialty_names(self) -> list[str]:
        return sorted(s.specialty for s in self.specialties)


class InstallerSpecialty(Base):
    __tablename__ = "installer_specialties"

    installer_id = Column(Text, ForeignKey("installers.id", ondelete="CASCADE"), primary_key=True)
    specialty = Column(Text, primary_key=True)

    installer = relationship("Installer", back_populates="specialties")

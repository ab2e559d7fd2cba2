from jobboard.models.job import Job, JobTrade
from jobboard.models.installer import Installer, InstallerSpecialty
from jobboard.models.application import Application

__all__ = ["Job", "JobTrade", "Installer", "InstallerSpecialty", "Application"]

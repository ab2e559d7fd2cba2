from pydantic import BaseModel, Field


class InstallerCreate(BaseModel):
    name: str = Field(min_length=2, max_length=120)
    bio: str = Field(min_length=1, max_length=4000)
    location_city: str = Field(min_length=2, max_length=80)
    location_state: str = Field(min_length=2, max_length=2)
    specialties: list[str] = Field(min_length=1, max_length=10)
    years_experience: int | None = Field(None, ge=0, le=80)
    is_available: bool = True
    avatar_url: str | None = Field(None, max_length=500)


class InstallerResponse(BaseModel):
    id: str
    name: str
    bio: str
    location_city: str
    location_state: str
    specialties: list[str] = []
    years_experience: int | None
    is_available: bool
    avatar_url: str | None
    created_at: str


class InstallerCreatedResponse(BaseModel):
    installer: InstallerResponse
    manage_token: str


class InstallerListResponse(BaseModel):
    installers: list[InstallerResponse]
    page: int
    limit: int

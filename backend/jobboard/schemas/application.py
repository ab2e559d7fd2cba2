from pydantic import BaseModel, Field


class ApplicationCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str | None = Field(None, max_length=40)
    message: str = Field(min_length=1, max_length=4000)
    resume_url: str | None = Field(None, max_length=500)


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    name: str
    email: str
    phone: str | None
    message: str
    resume_url: str | None
    created_at: str

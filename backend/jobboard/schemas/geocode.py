from pydantic import BaseModel, Field


class GeocodeRequest(BaseModel):
    location: str = Field(min_length=2, max_length=120)


class GeocodeResponse(BaseModel):
    lat: float
    lng: float

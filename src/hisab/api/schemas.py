from pydantic import BaseModel


class CategoryCreateRequest(BaseModel):
    name: str
    color: str | None = None


class TagCreateRequest(BaseModel):
    name: str


class SettingsUpdateRequest(BaseModel):
    currency: str

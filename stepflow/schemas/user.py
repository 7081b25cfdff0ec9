from pydantic import Field

from stepflow.schemas.base import CamelModel

class UserCreate(CamelModel):
    username: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

class UserPublic(CamelModel):
    id: int
    username: str
    email: str

from typing import Annotated, Optional

from pydantic import AliasChoices, BaseModel, Field
from pydantic import ConfigDict

# SQLite INTEGER is a signed 64-bit value
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1

StorageInt = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]

def _field(name: str):
    # accept both "name" and "Name" keys in request bodies
    return AliasChoices(name, name.capitalize())

class ProductIn(BaseModel):
    # id may be present in client payloads; storage assigns/keeps it
    id: Optional[StorageInt] = Field(default=None, validation_alias=_field("id"))
    name: Optional[str] = Field(default=None, validation_alias=_field("name"))
    description: Optional[str] = Field(default=None, validation_alias=_field("description"))
    quantity: StorageInt = Field(default=0, validation_alias=_field("quantity"))

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    quantity: int

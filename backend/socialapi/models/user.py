"""
User record as stored in the ``users`` collection of the JSON document.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """A stored user. ``id`` is persisted under the ``_id`` key."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    username: str = ""
    email: str = ""
    accountname: str = ""
    intro: Optional[str] = ""
    image: Optional[str] = ""
    password: Optional[str] = None
    following: List[str] = Field(default_factory=list)
    follower: List[str] = Field(default_factory=list)

    @field_validator("username", "email", "accountname", mode="before")
    @classmethod
    def null_to_empty_string(cls, v):
        """Records written by other clients may hold null here."""
        return "" if v is None else v

    @field_validator("following", "follower", mode="before")
    @classmethod
    def null_to_empty_list(cls, v):
        return [] if v is None else v

    def to_document(self) -> Dict[str, Any]:
        """Serialize back to the stored JSON shape."""
        return self.model_dump(by_alias=True)

"""
Pydantic schemas for user and profile requests/responses.

Request fields are all optional so that missing values produce the API's
own 400 messages instead of a generic validation error.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class UserPayload(BaseModel):
    """Fields accepted under the ``user`` key of a request body."""
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    accountname: Optional[str] = None
    intro: Optional[str] = None
    image: Optional[str] = None


class UserRequest(BaseModel):
    """Request body wrapper: ``{"user": {...}}``."""
    user: Optional[UserPayload] = None


class MessageResponse(BaseModel):
    message: str


class _Identified(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    username: str
    accountname: str
    image: Optional[str] = ""


class UserSummary(_Identified):
    """User returned after signup."""
    email: str
    intro: Optional[str] = ""


class SignupResponse(BaseModel):
    message: str
    user: UserSummary


class SigninUser(_Identified):
    """User returned after signin, with both tokens."""
    email: str
    accessToken: str
    refreshToken: str


class SigninResponse(BaseModel):
    user: SigninUser


class _Graph(_Identified):
    following: List[str] = []
    follower: List[str] = []
    followerCount: int = 0
    followingCount: int = 0


class MyInfo(_Graph):
    isfollow: bool = False


class MyInfoResponse(BaseModel):
    user: MyInfo


class UpdatedUser(_Graph):
    intro: Optional[str] = ""


class UpdatedUserResponse(BaseModel):
    user: UpdatedUser


class Profile(_Graph):
    """Public profile as seen by the requesting viewer."""
    intro: Optional[str] = ""
    isfollow: bool = False


class ProfileResponse(BaseModel):
    profile: Profile

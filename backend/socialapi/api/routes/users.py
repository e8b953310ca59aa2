"""
User account routes: signup, signin, my info, profile update and
availability checks.
"""
from fastapi import APIRouter, Depends, status
from socialapi.api.dependencies import get_current_user
from socialapi.core.exceptions import ValidationError
from socialapi.core.utils import is_valid_accountname, is_valid_email
from socialapi.db.session import get_db
from socialapi.db.store import DocumentStore
from socialapi.models.user import User
from socialapi.schemas.user import (
    MessageResponse,
    MyInfoResponse,
    SigninResponse,
    SignupResponse,
    UpdatedUserResponse,
    UserRequest,
)
from socialapi.services import auth_service, user_service
from socialapi.services.follow_service import to_profile

router = APIRouter(prefix="/user", tags=["user"])


@router.post("", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(body: UserRequest, db: DocumentStore = Depends(get_db)):
    """Register a new user."""
    user = auth_service.register(db, body.user)
    return {
        "message": "Signed up successfully",
        "user": user.model_dump(by_alias=True, exclude={"password", "following", "follower"}),
    }


@router.post("/signin", response_model=SigninResponse)
def signin(body: UserRequest, db: DocumentStore = Depends(get_db)):
    """Sign in and get an access and a refresh token."""
    user, access_token, refresh_token = auth_service.authenticate(db, body.user)
    return {
        "user": {
            "_id": user.id,
            "username": user.username,
            "email": user.email,
            "accountname": user.accountname,
            "image": user.image,
            "accessToken": access_token,
            "refreshToken": refresh_token,
        }
    }


@router.get("/myinfo", response_model=MyInfoResponse)
def my_info(current_user: User = Depends(get_current_user)):
    """Get the signed-in user's own profile."""
    return {"user": to_profile(current_user, isfollow=False)}


@router.put("", response_model=UpdatedUserResponse)
def update_user(
    body: UserRequest,
    current_user: User = Depends(get_current_user),
    db: DocumentStore = Depends(get_db),
):
    """Update username, accountname, intro or image of the signed-in user."""
    updated = auth_service.update_profile(db, current_user, body.user)
    return {"user": to_profile(updated, isfollow=False)}


@router.post("/emailvalid", response_model=MessageResponse)
def email_valid(body: UserRequest, db: DocumentStore = Depends(get_db)):
    """Check whether an email address is still available."""
    email = body.user.email if body.user else None
    if not email or not is_valid_email(email):
        raise ValidationError("Invalid access")
    if user_service.find_by_email(db, email):
        return {"message": "Email is already registered"}
    return {"message": "Email is available"}


@router.post("/accountnamevalid", response_model=MessageResponse)
def accountname_valid(body: UserRequest, db: DocumentStore = Depends(get_db)):
    """Check whether an accountname is still available."""
    accountname = body.user.accountname if body.user else None
    if not accountname or not is_valid_accountname(accountname):
        raise ValidationError("Invalid access")
    if user_service.find_by_accountname(db, accountname):
        return {"message": "Accountname is already in use"}
    return {"message": "Accountname is available"}

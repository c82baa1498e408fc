# controller/user_controller.py
from fastapi import APIRouter, Depends
from model.api import UserResponse
from util.constants import ANONYMOUS_SCOPE, InternalURIs
from controller.controller_dependencies import get_identity_scope

user_router = APIRouter()


@user_router.get(InternalURIs.USER, response_model=UserResponse)
async def current_user(scope: str = Depends(get_identity_scope)) -> UserResponse:
    return UserResponse(username=scope, authenticated=scope != ANONYMOUS_SCOPE)

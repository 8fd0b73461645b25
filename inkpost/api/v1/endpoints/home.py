from fastapi import APIRouter, Depends

from inkpost.auth.dependencies import require_roles
from inkpost.models import User
from inkpost.schemas.common import ApiResponse

router = APIRouter()


@router.get("/home", response_model=ApiResponse)
async def home(current_user: User = Depends(require_roles())):
    """Protected route open to any signed-in user."""
    return ApiResponse(
        message="Welcome to the protected home route!",
        data={"userId": current_user.id, "role": current_user.role.value},
    )

from fastapi import HTTPException, status
from app.schemas.auth.auth import CurrentUser

def is_admin(user: CurrentUser):
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access denied")

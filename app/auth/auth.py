from fastapi import APIRouter, Depends, HTTPException, Request
import jwt

from app.configuration.settings import Configuration
from app.schemas.auth.auth import CurrentUser

configuration = Configuration()

JWT_ALGORITHM = "HS256"
JWT_AUDIENCE = "authenticated"


class AuthRouter(APIRouter):
    def __init__(self):
        super().__init__(prefix="/auth", tags=["Auth"])
        self.add_api_route("/me", self.me, methods=["GET"], response_model=CurrentUser, response_model_by_alias=False)

    def decode_jwt(self, token: str) -> dict:
        if not configuration.supabase_jwt_secret:
            raise HTTPException(status_code=500, detail="Missing Supabase JWT secret")
        try:
            return jwt.decode(
                token,
                configuration.supabase_jwt_secret,
                algorithms=[JWT_ALGORITHM],
                audience=JWT_AUDIENCE,
            )
        except jwt.ExpiredSignatureError:
            raise HTTPException(status_code=401, detail="Token expired")
        except jwt.InvalidTokenError:
            raise HTTPException(status_code=401, detail="Invalid token")

    def get_current_user(self, request: Request) -> CurrentUser:
        authorization: str = request.headers.get("Authorization")
        if not authorization:
            raise HTTPException(status_code=401, detail="Unauthorized")

        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise HTTPException(status_code=401, detail="Invalid authorization header")

        payload = self.decode_jwt(parts[1])
        if not payload.get("sub"):
            raise HTTPException(status_code=401, detail="Invalid token")
        return CurrentUser.model_validate(payload)

    def me(self, request: Request) -> CurrentUser:
        return self.get_current_user(request)


get_current_user = AuthRouter().get_current_user

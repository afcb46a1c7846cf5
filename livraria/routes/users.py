from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from livraria.auth import ProtectedRoute, get_current_claims
from livraria.controllers import user_controller
from livraria.database import get_db
from livraria.errors import AuthenticationError, ConflictError
from livraria.logger import get_logger
from livraria.schemas import Token, TokenClaims, User, UserCreate, UserLogin

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Email ou senha inválidos"

router = APIRouter(tags=["users"])
protected_router = APIRouter(tags=["users"], route_class=ProtectedRoute)


@router.post("/user", response_model=User, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    if user_controller.get_user_by_email(db, email=user_data.email):
        raise ConflictError(user_controller.USER_EXISTS)
    return user_controller.create_user(db, user_data)


@router.post("/login", response_model=Token)
def login(user_data: UserLogin, request: Request, db: Session = Depends(get_db)):
    db_user = user_controller.authenticate_user(db, user_data.email, user_data.password)
    if db_user is None:
        logger.warning("Login failed")
        raise AuthenticationError(INVALID_CREDENTIALS, body_key="message")

    token = request.app.state.tokens.issue({"id": db_user.id, "email": db_user.email})
    return {"token": token}


@protected_router.get("/profile", response_model=TokenClaims)
def profile(claims: Dict[str, Any] = Depends(get_current_claims)):
    return claims

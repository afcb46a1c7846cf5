from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from livraria.auth import hash_password, verify_password
from livraria.database import store_errors
from livraria.errors import ConflictError
from livraria.logger import get_logger
from livraria.models import User
from livraria.schemas import UserCreate

logger = get_logger(__name__)

USER_EXISTS = "Usuário já existe"


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    with store_errors(db, "Erro ao buscar usuário", operation="get_user_by_email"):
        return db.query(User).filter(User.email == email).first()


def create_user(db: Session, user: UserCreate) -> User:
    db_user = User(name=user.name, email=user.email, password_hash=hash_password(user.password))
    db.add(db_user)
    with store_errors(db, "Erro ao criar usuário", operation="create_user"):
        try:
            db.commit()
        except IntegrityError:
            # a concurrent registration won the unique email constraint
            db.rollback()
            raise ConflictError(USER_EXISTS)
        db.refresh(db_user)
    logger.info("User created", user_id=db_user.id)
    return db_user


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """The user for these credentials, or None. Unknown email and bad password look the same."""
    db_user = get_user_by_email(db, email)
    if db_user is None or not verify_password(password, db_user.password_hash):
        return None
    return db_user

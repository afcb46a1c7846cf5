from .book import Book, BookBase, BookCreate
from .message import Message
from .user import User, UserCreate, UserLogin
from .token import Token, TokenClaims

__all__ = [
    "Book",
    "BookBase",
    "BookCreate",
    "Message",
    "User",
    "UserCreate",
    "UserLogin",
    "Token",
    "TokenClaims",
]

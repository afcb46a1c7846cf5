from typing import List, Optional

from sqlalchemy.orm import Session

from livraria.database import store_errors
from livraria.logger import get_logger
from livraria.models import Book, utcnow
from livraria.schemas import BookCreate

logger = get_logger(__name__)


def create_book(db: Session, book: BookCreate) -> Book:
    db_book = Book(**book.model_dump())
    with store_errors(db, "Erro ao criar livro", operation="create_book"):
        db.add(db_book)
        db.commit()
        db.refresh(db_book)
    logger.info("Book created", book_id=db_book.id)
    return db_book


def get_books(db: Session) -> List[Book]:
    with store_errors(db, "Erro ao buscar livros", operation="get_books"):
        return db.query(Book).order_by(Book.created_at, Book.id).all()


def get_book(db: Session, book_id: str) -> Optional[Book]:
    return db.query(Book).filter(Book.id == book_id).first()


def update_book(db: Session, book_id: str, book: BookCreate) -> Optional[Book]:
    with store_errors(db, "Não foi possível atualizar o livro", operation="update_book", book_id=book_id):
        db_book = get_book(db, book_id)
        if not db_book:
            return None
        for field, value in book.model_dump().items():
            setattr(db_book, field, value)
        # an UPDATE with unchanged values is skipped, so onupdate would not fire
        db_book.updated_at = utcnow()
        db.commit()
        db.refresh(db_book)
    logger.info("Book updated", book_id=book_id)
    return db_book


def delete_book(db: Session, book_id: str) -> Optional[Book]:
    with store_errors(db, "Não foi possível remover o livro", operation="delete_book", book_id=book_id):
        book = get_book(db, book_id)
        if book:
            db.delete(book)
            db.commit()
    if book:
        logger.info("Book deleted", book_id=book_id)
    return book

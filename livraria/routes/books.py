from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from livraria.auth import ProtectedRoute
from livraria.controllers import book_controller
from livraria.database import get_db
from livraria.errors import NotFoundError
from livraria.schemas import Book as BookSchema, BookCreate, Message

BOOK_NOT_FOUND = "Livro não encontrado"

router = APIRouter(prefix="/livros", tags=["livros"], route_class=ProtectedRoute)
# PUT /livros/{id} has never required a token; it stays on the public router
public_router = APIRouter(prefix="/livros", tags=["livros"])


@router.post("", response_model=BookSchema, status_code=status.HTTP_201_CREATED)
def create_book(book: BookCreate, db: Session = Depends(get_db)):
    return book_controller.create_book(db, book)


@router.get("", response_model=list[BookSchema])
def read_books(db: Session = Depends(get_db)):
    return book_controller.get_books(db)


@public_router.put("/{book_id}", response_model=BookSchema)
def update_book(book: BookCreate, book_id: str = Path(..., min_length=1), db: Session = Depends(get_db)):
    updated_book = book_controller.update_book(db, book_id, book)
    if not updated_book:
        raise NotFoundError(BOOK_NOT_FOUND)
    return updated_book


@router.delete("/{book_id}", response_model=Message)
def delete_book(book_id: str = Path(..., min_length=1), db: Session = Depends(get_db)):
    book = book_controller.delete_book(db, book_id)
    if not book:
        raise NotFoundError(BOOK_NOT_FOUND)
    return {"message": "Livro removido com sucesso"}

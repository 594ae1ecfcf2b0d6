from models.schemas.author import AuthorFormSchema
from models.schemas.book import BookFormSchema
from models.schemas.book_instance import BookInstanceFormSchema
from models.schemas.common import FormResult, validate_form
from models.schemas.genre import GenreFormSchema

__all__ = [
    "AuthorFormSchema",
    "BookFormSchema",
    "BookInstanceFormSchema",
    "FormResult",
    "GenreFormSchema",
    "validate_form",
]

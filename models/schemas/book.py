from marshmallow import fields

from models.schemas.common import FormSchema, required_text


class BookFormSchema(FormSchema):
    title = required_text("Title must not be empty.")
    # Form field "author" holds the Author id
    author = required_text("Author must not be empty.", attribute="author_id")
    summary = required_text("Summary must not be empty.")
    isbn = required_text("ISBN must not be empty.")
    # Checkbox group "genre": zero or more Genre ids
    genre = fields.List(fields.String(), attribute="genre_ids", load_default=list)

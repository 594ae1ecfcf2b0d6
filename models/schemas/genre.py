from marshmallow import fields, validate

from models.schemas.common import FormSchema

NAME_ERROR = "Genre name must contain at least 3 characters."


class GenreFormSchema(FormSchema):
    name = fields.String(
        required=True,
        validate=[
            validate.Length(min=3, error=NAME_ERROR),
            validate.Length(max=100, error="Genre name must be at most 100 characters."),
        ],
        error_messages={"required": NAME_ERROR, "null": NAME_ERROR},
    )

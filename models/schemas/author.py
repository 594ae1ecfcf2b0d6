from marshmallow import fields, validate

from models.schemas.common import FormSchema, optional_date

NAME_MAX = 100
# ASCII letters and digits only
ALNUM = r"^[A-Za-z0-9]*$"


def _name_field(label: str) -> fields.String:
    specified = f"{label} must be specified."
    return fields.String(
        required=True,
        validate=[
            validate.Length(min=1, error=specified),
            validate.Length(max=NAME_MAX, error=f"{label} must be at most {NAME_MAX} characters."),
            validate.Regexp(ALNUM, error=f"{label} has non-alphanumeric characters."),
        ],
        error_messages={"required": specified, "null": specified},
    )


class AuthorFormSchema(FormSchema):
    first_name = _name_field("First name")
    family_name = _name_field("Family name")
    date_of_birth = optional_date("Invalid date of birth.")
    date_of_death = optional_date("Invalid date of death.")

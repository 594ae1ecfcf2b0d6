from marshmallow import fields

from models.book_instance import LoanStatus
from models.schemas.common import FormSchema, optional_date, required_text

STATUS_ERROR = "Status must be one of: " + ", ".join(s.value for s in LoanStatus) + "."


class BookInstanceFormSchema(FormSchema):
    book = required_text("Book must be specified.", attribute="book_id")
    imprint = required_text("Imprint must be specified.")
    status = fields.Enum(
        LoanStatus,
        by_value=True,
        required=True,
        error_messages={"required": STATUS_ERROR, "null": STATUS_ERROR, "unknown": STATUS_ERROR},
    )
    due_back = optional_date("Invalid due back date.")

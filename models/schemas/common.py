from __future__ import annotations

from typing import NamedTuple

from marshmallow import Schema, ValidationError, fields, pre_load, validate

ISO_DATE_ERROR = "Invalid date, use YYYY-MM-DD."


def required_text(message: str, **kwargs) -> fields.String:
    """A string field that must be non-empty once trimmed."""
    return fields.String(
        required=True,
        validate=validate.Length(min=1, error=message),
        error_messages={"required": message, "null": message},
        **kwargs,
    )


def optional_date(message: str = ISO_DATE_ERROR, **kwargs) -> fields.Date:
    """An ISO-8601 date that may be left blank."""
    return fields.Date(
        format="iso",
        allow_none=True,
        load_default=None,
        error_messages={"invalid": message},
        **kwargs,
    )


class FormSchema(Schema):
    """
    Base for HTML form schemas.

    Values are trimmed before validation, blank dates become None and list
    fields read every submitted value (werkzeug MultiDict.getlist). Keys that
    are not declared fields are dropped.
    """

    def normalize(self, form) -> dict:
        values = {}
        for name, field in self.fields.items():
            if field.dump_only:
                continue
            key = field.data_key or name
            if isinstance(field, fields.List):
                raw = form.getlist(key) if hasattr(form, "getlist") else form.get(key)
                if raw is None:
                    raw = []
                elif isinstance(raw, str):
                    raw = [raw]
                values[key] = [v.strip() for v in raw if isinstance(v, str) and v.strip()]
                continue
            raw = form.get(key)
            if raw is None:
                continue
            if isinstance(raw, str):
                raw = raw.strip()
                if raw == "" and isinstance(field, fields.Date):
                    continue
            values[key] = raw
        return values

    @pre_load
    def _normalize(self, data, **kwargs):
        return self.normalize(data)


class FormResult(NamedTuple):
    data: dict | None
    values: dict
    errors: list

    @property
    def ok(self) -> bool:
        return not self.errors


def ordered_errors(schema: Schema, messages: dict) -> list[dict]:
    """
    Flatten marshmallow's error dict into [{"field", "message"}] in field
    declaration order.
    """
    errors = []
    keys = [field.data_key or name for name, field in schema.fields.items()]
    keys += [k for k in messages if k not in keys]
    for key in keys:
        for message in _flatten(messages.get(key, [])):
            errors.append({"field": key, "message": message})
    return errors


def _flatten(messages) -> list[str]:
    if isinstance(messages, str):
        return [messages]
    if isinstance(messages, dict):
        out = []
        for value in messages.values():
            out.extend(_flatten(value))
        return out
    out = []
    for value in messages:
        out.extend(_flatten(value))
    return out


def validate_form(schema: FormSchema, form) -> FormResult:
    """
    Run every field rule over the submitted form.

    Returns the loaded data on success; on failure data is None and errors
    lists every failed rule. values always carries the normalized submission
    so a form can be re-rendered with it.
    """
    values = schema.normalize(form)
    try:
        data = schema.load(values)
    except ValidationError as err:
        return FormResult(None, values, ordered_errors(schema, err.messages))
    return FormResult(data, values, [])

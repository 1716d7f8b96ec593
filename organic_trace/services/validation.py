from pydantic import ValidationError as PydanticValidationError

from organic_trace.core.errors import ValidationError
from organic_trace.schemas.forms import EntryForm, EventForm, ExitForm, ProductForm, UsageForm


def _message_for(form_cls, field, rule, default):
    messages = form_cls.MESSAGES.get(field, {})
    return messages.get(rule) or messages.get("*") or default


def validate_form(form_cls, data):
    """Parse ``data`` with ``form_cls`` or raise the first violated rule."""
    try:
        return form_cls.model_validate(dict(data or {}))
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        location = first.get("loc") or ("__root__",)
        field = str(location[0])
        rule = first.get("type", "invalid")
        raise ValidationError(
            field=field,
            rule=rule,
            message=_message_for(form_cls, field, rule, first.get("msg", "Invalid value")),
        ) from None


def first_violation(form_cls, data):
    """Return the first violated rule, or None when ``data`` is valid."""
    try:
        validate_form(form_cls, data)
    except ValidationError as exc:
        return exc
    return None


def validate_product(data):
    return validate_form(ProductForm, data)


def validate_entry(data):
    return validate_form(EntryForm, data)


def validate_exit(data):
    return validate_form(ExitForm, data)


def validate_usage(data):
    return validate_form(UsageForm, data)


def validate_event(data):
    return validate_form(EventForm, data)


__all__ = [
    "first_violation",
    "validate_entry",
    "validate_event",
    "validate_exit",
    "validate_form",
    "validate_product",
    "validate_usage",
]

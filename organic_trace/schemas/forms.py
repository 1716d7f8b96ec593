from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

NOTES_TOO_LONG = "Notes must be at most 500 characters"
QUANTITY_MESSAGES = {
    "greater_than": "Quantity must be positive",
    "missing": "Quantity is required",
    "finite_number": "Quantity must be a number",
    "*": "Quantity must be a number",
}


class FormBase(BaseModel):
    """Field order is rule order: the first failing field is the one reported."""

    model_config = ConfigDict(extra="ignore")

    # field -> pydantic error type -> message; "*" is the field's fallback.
    MESSAGES: ClassVar[Dict[str, Dict[str, str]]] = {}


class ProductForm(FormBase):
    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    category: str = Field(min_length=2, max_length=50)
    unit: str = Field(min_length=1, max_length=20)
    origin: str = Field(min_length=2, max_length=100)
    certification: str = Field(min_length=2, max_length=100)

    MESSAGES: ClassVar[Dict[str, Dict[str, str]]] = {
        "name": {
            "string_too_long": "Product name must be at most 100 characters",
            "*": "Product name is required",
        },
        "description": {"*": "Description must be at most 500 characters"},
        "category": {
            "string_too_long": "Category must be at most 50 characters",
            "*": "Category is required",
        },
        "unit": {
            "string_too_long": "Unit must be at most 20 characters",
            "*": "Unit is required",
        },
        "origin": {
            "string_too_long": "Origin must be at most 100 characters",
            "*": "Origin is required",
        },
        "certification": {
            "string_too_long": "Certification must be at most 100 characters",
            "*": "Certification is required",
        },
    }


class EntryForm(FormBase):
    product_id: str = Field(min_length=1)
    quantity: float = Field(gt=0, allow_inf_nan=False)
    batch_number: str = Field(min_length=3, max_length=50)
    received_from: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=500)

    MESSAGES: ClassVar[Dict[str, Dict[str, str]]] = {
        "product_id": {"*": "Please select a product"},
        "quantity": QUANTITY_MESSAGES,
        "batch_number": {
            "string_too_long": "Batch number must be at most 50 characters",
            "*": "Batch number is required",
        },
        "notes": {"*": NOTES_TOO_LONG},
    }


class ExitForm(FormBase):
    entry_product_id: str = Field(min_length=1)
    quantity: float = Field(gt=0, allow_inf_nan=False)
    assigned_to: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=500)

    MESSAGES: ClassVar[Dict[str, Dict[str, str]]] = {
        "entry_product_id": {"*": "Please select an entry product"},
        "quantity": QUANTITY_MESSAGES,
        "notes": {"*": NOTES_TOO_LONG},
    }


class UsageForm(FormBase):
    entry_product_id: str = Field(min_length=1)
    quantity: float = Field(gt=0, allow_inf_nan=False)
    notes: Optional[str] = Field(None, max_length=500)

    MESSAGES: ClassVar[Dict[str, Dict[str, str]]] = {
        "entry_product_id": {"*": "Select a product"},
        "quantity": dict(QUANTITY_MESSAGES, missing="Enter quantity"),
        "notes": {"*": NOTES_TOO_LONG},
    }


class EventForm(FormBase):
    batch_number: str = Field(min_length=1, max_length=50)
    event_type: str = Field(min_length=1, max_length=40)
    product_id: Optional[str] = None
    from_user: Optional[str] = None
    to_user: Optional[str] = None
    quantity: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    location: Optional[str] = Field(None, max_length=200)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    MESSAGES: ClassVar[Dict[str, Dict[str, str]]] = {
        "batch_number": {"*": "Batch number is required"},
        "event_type": {"*": "Event type is required"},
        "quantity": {
            "finite_number": "Quantity must be a number",
            "*": "Quantity cannot be negative",
        },
        "location": {"*": "Location must be at most 200 characters"},
        "metadata": {"*": "Metadata must be an object"},
    }

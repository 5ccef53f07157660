"""
Form models and form-level validation.

Required-field and format rules are checked here, before any request is made.
An invalid form raises ValidationFailed with per-field messages and never
reaches the network.
"""

import re
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ValidationFailed

# local@domain, no whitespace, one "@"
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")

F = TypeVar("F", bound=BaseModel)


def _required(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("This field is required")
    return value.strip()


def _email(value: str) -> str:
    value = _required(value)
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Enter a valid e-mail address")
    return value


class LoginForm(BaseModel):
    email: str
    password_hash: str

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return _email(v)

    @field_validator("password_hash")
    @classmethod
    def _check_password(cls, v: str) -> str:
        if not v:
            raise ValueError("This field is required")
        return v


class RegistrationForm(BaseModel):
    username: str
    full_name: str
    email: str
    password: str
    rol: str = "user"

    @field_validator("username", "full_name")
    @classmethod
    def _check_required(cls, v: str) -> str:
        return _required(v)

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return _email(v)

    @field_validator("password")
    @classmethod
    def _check_password(cls, v: str) -> str:
        if not v:
            raise ValueError("This field is required")
        return v


class PaymentForm(BaseModel):
    """Card details typed into the payment dialog. Only presence is checked."""
    card_holder: str
    card_number: str
    expiry: str
    cvc: str

    @field_validator("card_holder", "card_number", "expiry", "cvc")
    @classmethod
    def _check_required(cls, v: str) -> str:
        return _required(v)


class ProfileForm(BaseModel):
    email: Optional[str] = None
    full_name: Optional[str] = None
    password_hash: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        return _email(v)


class SettingsForm(BaseModel):
    theme: str = Field("system", pattern="^(light|dark|system)$")
    language: str = Field("es", pattern="^(es|en|fr)$")
    notifications: bool = True


def _field_errors(error: ValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ())) or "__form__"
        message = item.get("msg", "Invalid value")
        # pydantic prefixes messages raised from validators
        message = message.removeprefix("Value error, ")
        errors.setdefault(field, []).append(message)
    return errors


def validate_form(form_cls: Type[F], data: Mapping[str, Any]) -> F:
    """
    Validate raw form input.

    Args:
        form_cls: One of the form models above
        data: Raw field values

    Returns:
        The validated form.

    Raises:
        ValidationFailed: With messages keyed by field name.
    """
    try:
        return form_cls(**dict(data))
    except ValidationError as e:
        raise ValidationFailed(_field_errors(e)) from e

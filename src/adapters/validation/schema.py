"""
Submission schema adapter - Implements SubmissionValidator protocol.

This module declares the registration submission rules as a pydantic model
and translates pydantic's error report into the domain's field errors.
All rules are evaluated in one pass, so every violated field is reported
together. Unknown fields are ignored.
"""

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationError,
    field_validator,
)

from src.domain.exceptions import FieldError, SubmissionInvalid
from src.domain.ports import RegistrationSubmission

# External (wire) field names, in submission order
FIELD_NAMES = (
    "name",
    "studentEmail",
    "parentEmail",
    "school",
    "grade",
    "age",
    "country",
    "experience",
    "motivation",
)

_LABELS = {
    "name": "Name",
    "studentEmail": "Student email",
    "parentEmail": "Parent/guardian email",
    "school": "School name",
    "grade": "Grade",
    "age": "Age",
    "country": "Country",
    "experience": "Experience description",
    "motivation": "Motivation description",
}

_EMAIL_MESSAGES = {
    "studentEmail": "Please provide a valid email address",
    "parentEmail": "Please provide a valid parent/guardian email address",
}

_ShortText = Annotated[str, Field(min_length=2, max_length=100)]
_FreeText = Annotated[str, Field(max_length=1000)]


class RegistrationSchema(BaseModel):
    """Declarative rule set for a registration submission."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        extra="ignore",
    )

    name: _ShortText
    student_email: EmailStr = Field(alias="studentEmail")
    parent_email: EmailStr = Field(alias="parentEmail")
    school: str = Field(min_length=2, max_length=200)
    grade: int = Field(ge=9, le=12)
    age: int = Field(ge=13, le=19)
    country: _ShortText
    experience: _FreeText = Field(
        default="", validation_alias=AliasChoices("experience", "previousExperience")
    )
    motivation: _FreeText = ""

    @field_validator("student_email", "parent_email", mode="before")
    @classmethod
    def _strip_email(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        # EmailStr would accept "Name <addr>" and keep only the address
        if "<" in value or ">" in value:
            raise ValueError("display names are not allowed")
        return value.strip()

    @field_validator("experience", "motivation", mode="before")
    @classmethod
    def _blank_if_null(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("student_email", "parent_email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()

    def to_submission(self) -> RegistrationSubmission:
        return RegistrationSubmission(
            name=self.name,
            student_email=self.student_email,
            parent_email=self.parent_email,
            school=self.school,
            grade=self.grade,
            age=self.age,
            country=self.country,
            experience=self.experience,
            motivation=self.motivation,
        )


_ALIASES = {
    "student_email": "studentEmail",
    "parent_email": "parentEmail",
    "previousExperience": "experience",
}


_RANGES = {"grade": (9, 12), "age": (13, 19)}


def _message(field: str, error: dict[str, Any], raw_value: Any) -> str:
    """Translate one pydantic error into a submitter-facing message."""
    label = _LABELS.get(field, field)
    error_type = error["type"]
    ctx = error.get("ctx") or {}

    if error_type == "missing":
        return f"{label} is required"

    if field in _EMAIL_MESSAGES:
        if isinstance(raw_value, str) and not raw_value.strip():
            return f"{label} is required"
        return _EMAIL_MESSAGES[field]

    if error_type == "string_type":
        return f"{label} must be a string"
    if error_type == "string_too_short":
        if isinstance(raw_value, str) and not raw_value.strip():
            return f"{label} is required"
        return f"{label} must be at least {ctx['min_length']} characters long"
    if error_type == "string_too_long":
        return f"{label} cannot exceed {ctx['max_length']} characters"

    if error_type in ("int_parsing", "int_type"):
        return f"{label} must be a number"
    if error_type == "int_from_float":
        return f"{label} must be a whole number"
    if error_type in ("greater_than_equal", "less_than_equal"):
        low, high = _RANGES[field]
        return f"{label} must be between {low} and {high}"

    return error["msg"]


def _field_errors(exc: ValidationError, raw: Mapping[str, Any]) -> list[FieldError]:
    errors: dict[str, FieldError] = {}
    for error in exc.errors():
        loc = error["loc"][0] if error["loc"] else ""
        field = _ALIASES.get(str(loc), str(loc))
        if field in errors:
            continue
        raw_value = raw.get(field, error.get("input"))
        errors[field] = FieldError(
            field=field,
            message=_message(field, error, raw_value),
        )
    return sorted(
        errors.values(),
        key=lambda e: FIELD_NAMES.index(e.field) if e.field in FIELD_NAMES else len(FIELD_NAMES),
    )


class SchemaValidator:
    """
    Implements SubmissionValidator protocol via pydantic.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def validate(self, raw: Mapping[str, Any]) -> RegistrationSubmission:
        """
        Validate and normalize an untyped submission.

        Strings are trimmed, emails lowercased, and numeric-looking grade
        and age values coerced to integers.

        Args:
            raw: Submitted fields keyed by their external names

        Returns:
            Normalized RegistrationSubmission

        Raises:
            SubmissionInvalid: With one FieldError per violated field
        """
        if not isinstance(raw, Mapping):
            raise SubmissionInvalid(
                [
                    FieldError(field=name, message=f"{_LABELS[name]} is required")
                    for name in FIELD_NAMES[:7]
                ]
            )
        try:
            schema = RegistrationSchema.model_validate(dict(raw))
        except ValidationError as e:
            raise SubmissionInvalid(_field_errors(e, raw)) from None
        return schema.to_submission()

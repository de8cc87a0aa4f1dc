"""Shared schema building blocks — constrained string types and partial-update base.

Invariants:
    - NonEmptyStr is stripped before the length check (whitespace-only is rejected)
    - UrlStr / SlugStr validate but keep the caller's exact text (no normalization)
    - PartialUpdate.changes() raises BusinessRuleError when no field was sent
    - PartialUpdate rejects an explicit null for fields backed by NOT NULL columns

Design Decisions:
    - URL checked through HttpUrl, original string returned: stored URLs must match
      what clients later send back (URL lookups in deployments compare raw strings)
"""

from typing import Annotated, Any, ClassVar

from pydantic import (
    AfterValidator, BaseModel, HttpUrl, StringConstraints, TypeAdapter,
    model_validator,
)

from pvs_api.core.errors import BusinessRuleError

_http_url = TypeAdapter(HttpUrl)

SLUG_PATTERN = r"^[a-z0-9-]+$"


def check_url(value: str) -> str:
    _http_url.validate_python(value)
    return value


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
SlugStr = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, pattern=SLUG_PATTERN),
]
UrlStr = Annotated[str, StringConstraints(strip_whitespace=True), AfterValidator(check_url)]


class PartialUpdate(BaseModel):
    """Base for PATCH/PUT bodies where every field is optional.

    Fields listed in _non_nullable may be omitted but not sent as null:
    they back NOT NULL columns.
    """

    _non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_nulls(self):
        nulls = sorted(
            name for name in self._non_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"{', '.join(nulls)} may not be null")
        return self

    def changes(self) -> dict[str, Any]:
        values = self.model_dump(exclude_unset=True)
        if not values:
            raise BusinessRuleError("At least one field is required")
        return values

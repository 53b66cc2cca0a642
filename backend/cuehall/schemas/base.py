"""
Schema Base Classes
"""

from pydantic import BaseModel, model_validator
from typing import ClassVar, Tuple


class PartialUpdate(BaseModel):
    """
    PATCH body: omitted fields are left alone, but fields listed in
    `non_nullable` may not be sent as an explicit null
    """

    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for field in self.non_nullable:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

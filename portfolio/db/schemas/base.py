"""
Shared Pydantic base classes.

Wire format is camelCase (``imageUrl``, ``createdAt``); Python attributes stay
snake_case. Both spellings are accepted on input.
"""
from typing import Any, ClassVar, Dict, Tuple

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PartialUpdate(CamelModel):
    """Base for update payloads where every field is optional.

    Fields listed in ``non_nullable`` may be omitted but not sent as null.
    """

    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_explicit_nulls(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)

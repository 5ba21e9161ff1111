"""Shared pydantic base model."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TemplateModel(BaseModel):
    """Base model for template data.

    Fields are snake_case in Python and camelCase on the wire, so saved
    templates keep the shape editors expect (``locationId``, ``textStyle``...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_dict(self) -> dict:
        """Dump to a JSON-compatible dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

"""Shared pydantic base for records serialized in camelCase."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON (dashboard and CLI output)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

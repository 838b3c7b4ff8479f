"""
Shared base for HTTP DTOs.

The wire format is camelCase (backgroundColor, workflowId...); Python code
keeps snake_case. Requests accept both spellings.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

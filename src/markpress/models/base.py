"""
Base models for WordPress API records.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """
    Base model for records returned by the WordPress APIs.

    Subclasses build themselves from raw API payloads via the ``from_*``
    class methods and ignore fields they do not model.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for logging and CLI output."""
        return self.model_dump(exclude_none=True, exclude={"raw"})

"""
User Pydantic models
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictStr, model_validator


class User(BaseModel):
    """A user record as seen by API callers; the table's id column is never included"""

    model_config = ConfigDict(extra="ignore")

    name: StrictStr = ""
    email: StrictStr = ""
    location: StrictStr = ""

    @model_validator(mode="before")
    @classmethod
    def fold_request_keys(cls, data: Any) -> Any:
        """Accept a null body, skip null fields and match keys case-insensitively"""
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data

        folded = {}
        exact = set()
        for key, value in data.items():
            if not isinstance(key, str) or value is None:
                continue
            field = key.lower()
            if field not in cls.model_fields:
                continue
            # An exact-case key always wins over other spellings
            if key == field:
                folded[field] = value
                exact.add(field)
            elif field not in exact:
                folded[field] = value
        return folded


class InfoResponse(BaseModel):
    info: str


class ErrorResponse(BaseModel):
    error: str

from typing import Any, Dict, Optional
from pydantic import BaseModel, model_validator


class RecordModel(BaseModel):
    """Boundary model for JSON records.

    Declared fields carry the defaults the rest of the code relies on
    (flags such as ``listed`` or ``is_active`` default to visible). Every
    other key in the stored JSON is kept as an extra field.
    """

    id: Optional[int] = None

    class Config:
        extra = "allow"

    @model_validator(mode="before")
    @classmethod
    def drop_null_defaults(cls, data: Any) -> Any:
        # A null flag in the file means "not set", so the declared default applies
        if isinstance(data, dict):
            return {
                key: value for key, value in data.items()
                if not (value is None and key in cls.model_fields and key != "id")
            }
        return data

    @classmethod
    def normalize(cls, raw: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a raw record and return it as a plain dict with defaults applied."""
        return cls.model_validate(raw).model_dump()

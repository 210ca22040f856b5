from typing import Any

from bson import ObjectId


def to_object_id(value: Any) -> Any:
    """Coerce 24-char hex strings to ObjectId, leave anything else untouched."""
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def normalize_id_fields(doc: dict, *fields: str) -> dict:
    # normalize to string for API layer
    for field in ("_id", *fields):
        if field in doc and isinstance(doc[field], ObjectId):
            doc[field] = str(doc[field])
    return doc

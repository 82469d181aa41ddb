from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar, Union

from bson import ObjectId
from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def maybe_oid(x) -> Union[ObjectId, Any]:
    if isinstance(x, str) and ObjectId.is_valid(x):
        return ObjectId(x)
    return x

def to_model(model: Type[M], doc: Optional[Dict]) -> Optional[M]:
    if doc is None:
        return None
    doc = dict(doc)
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return model.model_validate(doc)

async def collect(model: Type[M], cursor) -> List[M]:
    return [to_model(model, d) async for d in cursor]

def to_doc(item: BaseModel) -> Dict:
    """Model -> stored document (camelCase fields, no empty _id)."""
    return item.model_dump(by_alias=True, exclude_none=True, exclude={"id"})

def status_filter(status: Union[str, Sequence[str]]):
    if isinstance(status, str):
        return status
    return {"$in": list(status)}

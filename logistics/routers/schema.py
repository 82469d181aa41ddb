# logistics/routers/schema.py
from fastapi import APIRouter, Depends, HTTPException

from logistics.core.db import get_db
from logistics.core.errors import SchemaConflictError
from logistics.core.indexes import describe_schema, init_schema, missing_indexes

router = APIRouter(prefix="/api/schema", tags=["schema"])

@router.get("")
async def get_schema(db=Depends(get_db)):
    current = await describe_schema(db)
    missing = await missing_indexes(db)
    return {
        "database": db.name,
        "collections": {
            name: [[list(k) for k in keys] for keys in patterns]
            for name, patterns in current.items()
        },
        "missing": [spec.qualified_name for spec in missing],
        "ok": not missing,
    }

@router.post("/init")
async def run_init(db=Depends(get_db)):
    try:
        report = await init_schema(db)
    except SchemaConflictError as ex:
        raise HTTPException(status_code=409, detail=ex.as_dict())
    return report.as_dict()

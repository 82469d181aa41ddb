from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal
from datetime import datetime

ReturnStatus = Literal[
    "REQUESTED", "PENDING_APPROVAL", "APPROVED", "PICKUP_SCHEDULED",
    "PICKED_UP", "IN_TRANSIT", "PROCESSING", "COMPLETED",
    "REJECTED", "EXPIRED", "CANCELLED",
]
Priority = Literal["LOW", "MEDIUM", "HIGH", "URGENT"]

class ReturnRequest(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    returnId: str
    customerId: str
    parcelId: str
    depotId: Optional[str] = None
    reason: Optional[str] = None
    priority: Priority = "MEDIUM"
    status: ReturnStatus = "REQUESTED"
    requestedAt: Optional[datetime] = None
    ttlExpiry: Optional[datetime] = None
    lastUpdated: Optional[datetime] = None
    isActive: bool = True

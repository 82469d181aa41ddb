from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal
from datetime import datetime

Confidence = Literal["HIGH", "MEDIUM", "LOW", "VERY_LOW"]

class ETACalculation(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    parcelId: str
    depotId: Optional[str] = None
    driverId: Optional[str] = None
    vehicleId: Optional[str] = None
    routeId: Optional[str] = None
    estimatedArrival: datetime
    estimatedMinutes: Optional[int] = None
    distanceKm: Optional[float] = None
    confidence: Optional[Confidence] = None
    calculatedAt: Optional[datetime] = None
    lastUpdated: Optional[datetime] = None
    calculationVersion: Optional[str] = None
    isActive: bool = True

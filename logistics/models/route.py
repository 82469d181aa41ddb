from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal
from datetime import datetime

RouteStatus = Literal["PLANNED", "OPTIMIZING", "IN_PROGRESS", "COMPLETED", "CANCELLED"]

class Route(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    routeId: Optional[str] = None
    depotId: str
    driverId: Optional[str] = None
    vehicleId: Optional[str] = None
    status: RouteStatus = "PLANNED"
    plannedStartTime: Optional[datetime] = None
    plannedEndTime: Optional[datetime] = None
    totalDistanceKm: Optional[float] = None
    estimatedDurationMinutes: Optional[int] = None
    lastUpdated: Optional[datetime] = None

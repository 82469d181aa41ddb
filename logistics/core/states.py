ROUTE_STATES = ["PLANNED", "OPTIMIZING", "IN_PROGRESS", "COMPLETED", "CANCELLED"]

ROUTE_TRANSITIONS = {
    ("PLANNED",     "OPTIMIZING"),
    ("OPTIMIZING",  "PLANNED"),
    ("PLANNED",     "IN_PROGRESS"),
    ("PLANNED",     "CANCELLED"),
    ("OPTIMIZING",  "CANCELLED"),
    ("IN_PROGRESS", "COMPLETED"),
    ("IN_PROGRESS", "CANCELLED"),
}

RETURN_STATES = [
    "REQUESTED", "PENDING_APPROVAL", "APPROVED", "PICKUP_SCHEDULED",
    "PICKED_UP", "IN_TRANSIT", "PROCESSING", "COMPLETED",
    "REJECTED", "EXPIRED", "CANCELLED",
]

RETURN_TRANSITIONS = {
    ("REQUESTED",        "PENDING_APPROVAL"),
    ("REQUESTED",        "REJECTED"),
    ("REQUESTED",        "CANCELLED"),
    ("REQUESTED",        "EXPIRED"),

    ("PENDING_APPROVAL", "APPROVED"),
    ("PENDING_APPROVAL", "REJECTED"),
    ("PENDING_APPROVAL", "EXPIRED"),

    ("APPROVED",         "PICKUP_SCHEDULED"),
    ("APPROVED",         "CANCELLED"),
    ("APPROVED",         "EXPIRED"),

    ("PICKUP_SCHEDULED", "PICKED_UP"),
    ("PICKUP_SCHEDULED", "IN_TRANSIT"),
    ("PICKUP_SCHEDULED", "CANCELLED"),

    ("PICKED_UP",        "IN_TRANSIT"),
    ("IN_TRANSIT",       "PROCESSING"),
    ("PROCESSING",       "COMPLETED"),
}

# statuses a TTL sweep may move to EXPIRED
RETURN_EXPIRABLE = sorted({src for src, dst in RETURN_TRANSITIONS if dst == "EXPIRED"})

def can_transition_route(src: str, dst: str) -> bool:
    return (src, dst) in ROUTE_TRANSITIONS

def can_transition_return(src: str, dst: str) -> bool:
    return (src, dst) in RETURN_TRANSITIONS

from typing import Dict, Optional
from addonhub.types.base import BaseModel


class ObjectMeta(BaseModel):
    name: str
    namespace: Optional[str]
    uid: Optional[str]
    resource_version: Optional[str]
    generation: int
    labels: Dict[str, str]
    annotations: Dict[str, str]


class Condition(BaseModel):
    type: str
    status: str
    reason: Optional[str]
    message: Optional[str]
    observed_generation: Optional[int]
    last_transition_time: Optional[str]

from typing import List
from addonhub.types.base import BaseModel
from addonhub.types.models.meta import ObjectMeta, Condition


class ManifestWorkStatus(BaseModel):
    conditions: List[Condition]


class ManifestWork(BaseModel):
    """Bundle of manifests dispatched to one managed cluster."""

    metadata: ObjectMeta
    status: ManifestWorkStatus

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def generation(self) -> int:
        return self.metadata.generation

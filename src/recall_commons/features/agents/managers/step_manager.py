"""Step manager."""

from ....config.constants import CacheKeyPrefix, EntityType
from ...managers.base_manager import BaseManager
from ..entities.records import Step
from ..entities.requests import StepCreate, StepUpdate


class StepManager(BaseManager[Step, StepCreate, StepUpdate]):
    """Manages step accounting rows, which always bypass the cache."""
    
    record_type = Step
    model_name = "Step"
    entity_type = EntityType.STEP
    cache_prefix = CacheKeyPrefix.STEP
    cache_enabled = False
    id_prefix = "step"

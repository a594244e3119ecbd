from typing import Optional
from datetime import datetime

from models.common import EntityResponse


class ChangeLog(EntityResponse):
    entity_name: str
    entity_id: Optional[str] = None
    change_type: str
    changed_fields: Optional[str] = None
    change_date: datetime

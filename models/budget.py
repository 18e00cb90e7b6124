import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from models.category import Category


@dataclass
class Budget:
    name: str               # matches the category name
    amount: Decimal         # ceiling for the period
    period_start: datetime
    period_end: datetime
    category_id: Optional[str] = None
    categories: list[Category] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

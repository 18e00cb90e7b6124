import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from models.category import Category
from models.tag import Tag
from utils.constants import UNCATEGORIZED_LABEL


class TransactionType(str, Enum):
    EXPENSE = "expense"
    INCOME = "income"


@dataclass
class Transaction:
    amount: Decimal                 # any sign; direction comes from type
    date: datetime
    note: str = ""
    type: TransactionType = TransactionType.EXPENSE
    category: Optional[Category] = None
    tags: list[Tag] = field(default_factory=list)
    is_recurring: bool = False
    recurrence_rule: Optional[str] = None   # stored, never interpreted
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def category_name(self) -> str:
        return self.category.name if self.category else UNCATEGORIZED_LABEL

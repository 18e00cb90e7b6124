import uuid
from dataclasses import dataclass, field

from utils.constants import DEFAULT_CATEGORY_COLOR


@dataclass
class Category:
    name: str
    color_hex: str = DEFAULT_CATEGORY_COLOR   # display-only
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

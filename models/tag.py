import uuid
from dataclasses import dataclass, field


@dataclass
class Tag:
    name: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

from dataclasses import dataclass


@dataclass
class Rule:
    id: int
    name: str
    condition: str
    action: str
    is_active: bool = True

from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform()
class _ServiceMeta(type):
    def __new__(mcs, name: str, bases: tuple, namespace: dict):
        cls = super().__new__(mcs, name, bases, namespace)
        # Only concrete services become dataclasses, not Service itself
        if any(isinstance(base, mcs) for base in bases):
            cls = dataclass(cls)
        return cls


class Service(metaclass=_ServiceMeta):
    """Domain service base.

    Subclasses declare their collaborators as annotated fields and are
    turned into dataclasses, so dishka can build them from type hints.
    """

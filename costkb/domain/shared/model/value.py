from typing import Generic, NewType, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel

T = TypeVar("T")

UserId = NewType("UserId", str)


class ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True)


class RootValueObject(RootModel[T], Generic[T]):
    model_config = ConfigDict(frozen=True)

from pydantic import BaseModel, ConfigDict


class Aggregate(BaseModel):
    """Base class for mutable domain aggregates.

    Assignments are re-validated so invariants declared on fields
    (e.g. non-negative counters) hold after every mutation.
    """

    model_config = ConfigDict(validate_assignment=True)

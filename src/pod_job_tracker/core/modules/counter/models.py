"""Job counter operations and update results."""

from enum import StrEnum

from pydantic import BaseModel


class CounterOperation(StrEnum):
    """The two changes a caller can make to a job counter."""

    INCREMENT = "increment"
    DECREMENT = "decrement"

    def apply(self, value: int, allow_negative: bool = False) -> int:
        """Compute the new counter value.

        Increment has no ceiling. Decrement stops at zero unless negative values are allowed.
        """
        if self is CounterOperation.INCREMENT:
            return value + 1
        new_value = value - 1
        if new_value < 0 and not allow_negative:
            return 0
        return new_value


class CounterUpdate(BaseModel):
    """Outcome of a successful counter update."""

    namespace: str
    pod_name: str
    label: str
    previous_value: int
    value: int
    label_removed: bool  # True when the label was dropped from the pod instead of written
    attempts: int  # Read-compute-write cycles used, more than one after write conflicts

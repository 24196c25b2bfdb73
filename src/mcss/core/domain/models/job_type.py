"""Reduction job types."""

from enum import Enum


class JobType(Enum):
    """Selects the reducer a task dispatches to."""

    SINGLE = "single"
    MULTIPLE = "multiple"

    @classmethod
    def parse(cls, value: str) -> "JobType":
        """Parse a job type name, case-insensitively.

        Raises:
            ValueError: If the name is unknown
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(job.value for job in cls)
            raise ValueError(f"Unknown job type {value!r} (expected one of: {choices})") from None

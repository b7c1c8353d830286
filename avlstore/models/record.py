"""
Record - the (key, value) pair held by the index.
"""

from dataclasses import dataclass


@dataclass
class Record:
    """
    A keyed record stored in the index.

    Attributes:
        key: Textual identifier. The tree is ordered on this field alone.
        value: Integer payload. Used for delete identity and range queries.
    """

    key: str
    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.key, str):
            raise TypeError(f"Record key must be str, got {type(self.key).__name__}")
        # bool is an int subclass but never a meaningful payload
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"Record value must be int, got {type(self.value).__name__}"
            )

    @classmethod
    def not_found(cls) -> "Record":
        """Sentinel returned by lenient lookups that miss."""
        return cls(key="", value=0)

    def is_not_found(self) -> bool:
        return self.key == "" and self.value == 0

    def matches(self, key: str, value: int) -> bool:
        return self.key == key and self.value == value

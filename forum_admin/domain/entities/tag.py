"""Domain entity representing a question tag."""

from dataclasses import dataclass


@dataclass
class Tag:
    id: int
    name: str
    question_count: int = 0


__all__ = ["Tag"]

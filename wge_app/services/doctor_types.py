"""Result records produced by the doctor checks."""

from dataclasses import dataclass, field
from typing import Iterable, List


@dataclass
class DoctorCheckItem:
    label: str
    ok: bool
    required: bool = True


@dataclass
class DoctorCheckGroup:
    title: str
    items: List[DoctorCheckItem]

    @property
    def failures(self) -> int:
        """Failed checks that are required; optional ones only inform."""
        return sum(1 for item in self.items if item.required and not item.ok)


@dataclass
class DoctorReport:
    groups: List[DoctorCheckGroup] = field(default_factory=list)
    info_messages: List[str] = field(default_factory=list)

    @property
    def total_failures(self) -> int:
        return sum(group.failures for group in self.groups)

    @property
    def ok(self) -> bool:
        return self.total_failures == 0

    @classmethod
    def merge(cls, reports: Iterable["DoctorReport"]) -> "DoctorReport":
        merged = cls()
        for report in reports:
            merged.groups.extend(report.groups)
            merged.info_messages.extend(report.info_messages)
        return merged

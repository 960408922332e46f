"""
Slot Monitor Data Models

Plain dataclasses shared by the scraper, the notifier and the daemon.
Nothing here is persisted; a list of slots lives for one check cycle.
"""

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class Target:
    """Location + category pair selecting the relevant table rows."""

    location: str
    category: str


@dataclass
class Slot:
    location: str
    category: str
    date: str  # display text from the table header, e.g. "07/30"
    available: bool = True

    def to_dict(self):
        return asdict(self)


def slot_dates(slots):
    """
    Extract the display dates from a list of slots.

    Args:
        slots (list[Slot]): Slots found in one check

    Returns:
        list[str]: Dates in the same order
    """
    return [slot.date for slot in slots]

"""Time slots and half-open booking intervals."""

from dataclasses import dataclass

from booking_engine.scheduling.time_model import MINUTES_PER_DAY, to_minutes


@dataclass(frozen=True)
class TimeSlot:
    """A clock time on a calendar date."""

    date: str
    time: str

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.time)


@dataclass(frozen=True)
class BookingInterval:
    """A [start, end) minute range on one date."""

    date: str
    start_minutes: int
    end_minutes: int

    def __post_init__(self) -> None:
        if not 0 <= self.start_minutes < MINUTES_PER_DAY:
            raise ValueError(f"start_minutes out of range: {self.start_minutes}")
        if self.start_minutes >= self.end_minutes:
            raise ValueError(
                f"Empty interval: start {self.start_minutes} >= end {self.end_minutes}"
            )

    @classmethod
    def from_slot(cls, date: str, clock_time: str, duration_total: int) -> "BookingInterval":
        start = to_minutes(clock_time)
        return cls(date=date, start_minutes=start, end_minutes=start + duration_total)

    @property
    def duration(self) -> int:
        return self.end_minutes - self.start_minutes

    def overlaps(self, other: "BookingInterval") -> bool:
        """Half-open intersection test; touching endpoints do not overlap."""
        return (
            self.date == other.date
            and self.start_minutes < other.end_minutes
            and self.end_minutes > other.start_minutes
        )


def overlaps(a: BookingInterval, b: BookingInterval) -> bool:
    return a.overlaps(b)

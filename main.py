"""
Offline console demo: drives the booking engine against in-memory collaborators.

Uses the real slot board, eligibility rules and submission protocol with
the in-memory store. No network calls.

Usage:
    python main.py                     # slot grid + stale-grid conflict
    python main.py --scenario race     # concurrent submits, both store modes
    python main.py --date 2025-12-20
"""

import argparse
import asyncio
from datetime import timedelta
from typing import Optional

from booking_engine.adapters.memory import InMemoryReservationStore, RecordingNotifier
from booking_engine.catalog import PackageCatalog
from booking_engine.config import settings
from booking_engine.errors import BookingError
from booking_engine.schemas.booking_schema import BookingDraft
from booking_engine.scheduling.block_registry import AdminBlockRegistry
from booking_engine.scheduling.board import SlotBoard, SlotStatus
from booking_engine.scheduling.time_model import business_now, format_clock_12h
from booking_engine.submission.notifications import FAILURE_MESSAGE
from booking_engine.submission.protocol import BookingSubmission

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

_STATUS_COLOURS = {
    SlotStatus.AVAILABLE: GREEN,
    SlotStatus.SELECTED: YELLOW,
    SlotStatus.BOOKED: RED,
}


def _draft(date: str, time: str, name: str, phone: str) -> BookingDraft:
    return BookingDraft(
        full_name=name,
        email=f"{name.split()[0].lower()}@example.com",
        phone=phone,
        package_id="standard",
        date=date,
        time=time,
    )


def _banner(title: str) -> None:
    print()
    print(f"{BOLD}{'=' * 60}{RESET}")
    print(f"{BOLD}  {title}{RESET}")
    print(f"{BOLD}  Business: {settings.business.name} ({settings.business.timezone}){RESET}")
    print(f"{BOLD}{'=' * 60}{RESET}")


async def _print_grid(board: SlotBoard, date: str, selected: Optional[str] = None) -> None:
    await board.select_date(date)
    cells = []
    for view in board.slots(duration_total=45, selected_time=selected):
        colour = _STATUS_COLOURS[view.status]
        cells.append(f"{colour}{view.slot.time}{RESET}")
    print(f"\n{date}: " + " ".join(cells))
    print(f"{DIM}  legend: {GREEN}available{RESET}{DIM} {YELLOW}selected{RESET}"
          f"{DIM} {RED}booked{RESET}")


async def run_stale_grid(date: str) -> None:
    _banner("Scenario: stale grid")
    store = InMemoryReservationStore()
    submission = BookingSubmission(
        store, PackageCatalog(), RecordingNotifier(), AdminBlockRegistry()
    )
    board = SlotBoard(store)

    await _print_grid(board, date, selected="13:00")
    print(f"{DIM}  >> client A sees 13:00 free and starts filling the form{RESET}")

    outcome = await submission.submit(_draft(date, "13:00", "Maria Santos", "09171234567"))
    print(f"{DIM}  >> client B submits 13:00: {outcome.state.value}{RESET}")

    outcome = await submission.submit(_draft(date, "13:00", "Jose Rizal", "09181234567"))
    print(f"{DIM}  >> client A submits 13:00: {outcome.state.value}{RESET}")
    print(f"  {outcome.message}")
    await _print_grid(board, date)


async def run_race(date: str) -> None:
    for enforce in (False, True):
        mode = "store constraint" if enforce else "optimistic"
        _banner(f"Scenario: concurrent submits ({mode})")
        store = InMemoryReservationStore(latency=0.01, enforce_no_overlap=enforce)
        submission = BookingSubmission(store, PackageCatalog())
        outcomes = await asyncio.gather(
            submission.submit(_draft(date, "15:00", "Ana Cruz", "09171112222")),
            submission.submit(_draft(date, "15:30", "Ben Reyes", "09173334444")),
        )
        for outcome in outcomes:
            label = outcome.record.reference if outcome.record else "-"
            print(f"  {outcome.state.value:<18} {label}")
        active = store.active_records(date)
        print(f"{DIM}  >> active reservations on {date}: "
              f"{', '.join(format_clock_12h(r.time) for r in active)}{RESET}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Booking engine console demo")
    parser.add_argument("--scenario", choices=["stale", "race"], default="stale")
    parser.add_argument("--date", help="YYYY-MM-DD, defaults to tomorrow in business time")
    args = parser.parse_args()

    date = args.date or (
        business_now(settings.business.timezone).date() + timedelta(days=1)
    ).isoformat()
    runner = run_race if args.scenario == "race" else run_stale_grid
    try:
        asyncio.run(runner(date))
    except BookingError as exc:
        print(f"{RED}{FAILURE_MESSAGE} ({exc}){RESET}")


if __name__ == "__main__":
    main()

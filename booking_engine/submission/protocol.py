"""
Booking submission protocol: re-validate against fresh state, then commit.

The slot grid a customer sees was computed when the date was selected and
may be stale by the time they press submit. On submit this protocol:

1. validates and sanitizes the draft (no store access),
2. re-queries the store for the chosen date and re-runs the overlap test
   against the exact proposed interval,
3. writes the reservation, then its availability projection,
4. fires the booking-received notification.

There is no lock between step 2 and step 3. Two submissions for the same
time can both pass step 2 and both commit unless the store itself refuses
overlapping writes (it then raises ConflictError from create_reservation,
which is handled like a failed re-validation).

Usage:
    submission = BookingSubmission(store, catalog, notifier, registry)
    outcome = await submission.submit(draft)
    if outcome.state == SubmissionState.REJECTED_CONFLICT:
        draft = outcome.draft  # time cleared, ask for another slot
"""

import uuid
from dataclasses import dataclass, field
from typing import Optional

from booking_engine.catalog import PackageCatalog
from booking_engine.config import AppConfig, settings
from booking_engine.errors import (
    BookingError,
    ConflictError,
    PartialCommitError,
    TransportError,
    ValidationError,
)
from booking_engine.logging_context import get_attempt_logger, set_attempt_id
from booking_engine.ports import NotifierPort, ReservationStorePort
from booking_engine.reference import generate_booking_reference
from booking_engine.schemas.booking_schema import (
    BookingDraft,
    ReservationRecord,
    ReservationStatus,
)
from booking_engine.scheduling.availability import AvailabilityIndex
from booking_engine.scheduling.block_registry import AdminBlockRegistry
from booking_engine.scheduling.eligibility import check_slot_eligibility
from booking_engine.scheduling.intervals import BookingInterval
from booking_engine.scheduling.slot_generator import generate_time_slots
from booking_engine.scheduling.time_model import Clock, business_now, utc_clock
from booking_engine.submission.notifications import (
    CONFLICT_MESSAGE,
    INVALID_MESSAGE,
    build_committed_message,
    build_received_notification,
)
from booking_engine.submission.state_machine import (
    SubmissionState,
    SubmissionStateMachine,
    SubmissionTrigger,
)
from booking_engine.submission.validation import (
    ValidatedBooking,
    describe_fields,
    validate_draft,
)

logger = get_attempt_logger(__name__)


@dataclass
class SubmissionOutcome:
    """Terminal result of one submit that did not raise."""

    state: SubmissionState
    draft: BookingDraft
    message: str
    record_id: Optional[str] = None
    record: Optional[ReservationRecord] = None
    error: Optional[BookingError] = None
    trace: list[str] = field(default_factory=list)

    @property
    def committed(self) -> bool:
        return self.state == SubmissionState.COMMITTED


class BookingSubmission:
    """Runs one submission attempt per submit() call."""

    def __init__(
        self,
        store: ReservationStorePort,
        catalog: PackageCatalog,
        notifier: Optional[NotifierPort] = None,
        registry: Optional[AdminBlockRegistry] = None,
        config: Optional[AppConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._notifier = notifier
        self._registry = registry
        self._config = config or settings
        self._clock = clock or utc_clock

    async def submit(self, draft: BookingDraft) -> SubmissionOutcome:
        """Validate, re-check availability and commit a draft.

        Returns:
            A committed, rejected_conflict or rejected_invalid outcome.

        Raises:
            TransportError: The store failed before anything was committed
                (or it is unknown whether the first write landed). Unexpected
                errors from the reservation write are wrapped in it.
            PartialCommitError: The reservation was written but its
                availability projection was not.
        """
        set_attempt_id(f"ATT-{uuid.uuid4().hex[:8]}")
        sm = SubmissionStateMachine()
        sm.transition(SubmissionTrigger.SUBMITTED)
        logger.info("Submission started for %s at %s", draft.date, draft.time)

        try:
            booking = self._validate(draft)
        except ValidationError as exc:
            sm.transition(SubmissionTrigger.FIELDS_INVALID)
            logger.info("Submission rejected, invalid fields: %s", exc.fields)
            return SubmissionOutcome(
                state=sm.current_state,
                draft=draft,
                message=INVALID_MESSAGE.format(fields=describe_fields(exc.fields)),
                error=exc,
                trace=sm.get_state_trace(),
            )

        interval = BookingInterval.from_slot(
            booking.slot.date, booking.slot.time, booking.quote.duration_total
        )

        # Fresh read: the grid's index may be minutes old.
        try:
            index = await AvailabilityIndex.build(self._store, booking.slot.date)
        except TransportError:
            sm.transition(SubmissionTrigger.COMMIT_FAILED)
            logger.error("Re-validation query failed for %s", booking.slot.date, exc_info=True)
            raise

        conflicts = index.conflicts(interval)
        if conflicts:
            logger.info(
                "Re-validation found %d overlapping booking(s) for %s %s",
                len(conflicts), booking.slot.date, booking.slot.time,
            )
            return self._reject_conflict(
                sm, draft, ConflictError(booking.slot.date, booking.slot.time)
            )
        logger.info(
            "Re-validation passed for %s %s against %d booked interval(s)",
            booking.slot.date, booking.slot.time, len(index),
        )

        record = self._build_record(draft, booking)
        try:
            record_id = await self._store.create_reservation(record)
        except ConflictError as exc:
            logger.info("Store refused overlapping reservation for %s %s", exc.date, exc.time)
            return self._reject_conflict(sm, draft, exc)
        except TransportError:
            sm.transition(SubmissionTrigger.COMMIT_FAILED)
            logger.error("Reservation write failed for %s", record.reference, exc_info=True)
            raise
        except Exception as exc:
            sm.transition(SubmissionTrigger.COMMIT_FAILED)
            logger.exception("Reservation write failed for %s", record.reference)
            raise TransportError(f"Reservation write failed: {exc}") from exc

        try:
            await self._store.create_projection(record_id, record.to_projection())
        except TransportError as exc:
            sm.transition(SubmissionTrigger.COMMIT_FAILED)
            logger.error(
                "PARTIAL COMMIT: reservation %s (%s) has no availability projection; "
                "needs reconciliation",
                record.reference, record_id,
            )
            raise PartialCommitError(record_id, record.reference) from exc

        sm.transition(SubmissionTrigger.COMMIT_SUCCEEDED)
        logger.info("Booking committed: %s (%s)", record.reference, record_id)

        await self._notify(record, booking)

        return SubmissionOutcome(
            state=sm.current_state,
            draft=draft,
            message=build_committed_message(record),
            record_id=record_id,
            record=record,
            trace=sm.get_state_trace(),
        )

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _validate(self, draft: BookingDraft) -> ValidatedBooking:
        """Field checks plus the blocked-date, past-slot and slot-grid rules."""
        booking = validate_draft(draft, self._catalog, self._config.submission)
        now = business_now(self._config.business.timezone, self._clock)
        result = check_slot_eligibility(
            booking.slot, booking.quote.duration_total, None, self._registry, now
        )
        if not result.eligible:
            field_name = "date" if result.reason in ("blocked", "past_date") else "time"
            raise ValidationError([field_name], result.message)
        slots = generate_time_slots(booking.slot.date, self._config.business)
        if booking.slot.time not in slots:
            raise ValidationError(
                ["time"], f"{booking.slot.time} is not a bookable start time on {booking.slot.date}"
            )
        return booking

    def _build_record(self, draft: BookingDraft, booking: ValidatedBooking) -> ReservationRecord:
        today = business_now(self._config.business.timezone, self._clock).date()
        return ReservationRecord(
            reference=generate_booking_reference(
                self._config.business.reference_prefix, today
            ),
            full_name=booking.contact.full_name,
            email=booking.contact.email,
            phone=booking.contact.phone,
            notes=booking.contact.notes,
            package_id=booking.package.id,
            date=booking.slot.date,
            time=booking.slot.time,
            extension_minutes=draft.extension_minutes,
            duration_total=booking.quote.duration_total,
            total_price=booking.quote.total_price,
            downpayment=booking.quote.downpayment,
            status=ReservationStatus.PENDING,
            created_at=self._clock(),
            payment_proof_ref=draft.payment_proof_ref,
        )

    def _reject_conflict(
        self, sm: SubmissionStateMachine, draft: BookingDraft, error: ConflictError
    ) -> SubmissionOutcome:
        sm.transition(SubmissionTrigger.CONFLICT_FOUND)
        return SubmissionOutcome(
            state=sm.current_state,
            draft=draft.model_copy(update={"time": None}),
            message=CONFLICT_MESSAGE,
            error=error,
            trace=sm.get_state_trace(),
        )

    async def _notify(self, record: ReservationRecord, booking: ValidatedBooking) -> None:
        """Fire the received notice; a failure never undoes the booking."""
        if self._notifier is None:
            return
        try:
            await self._notifier.send(build_received_notification(record, booking.package))
        except Exception:
            logger.exception("Failed to send notification for %s", record.reference)


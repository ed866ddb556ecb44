"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""

import pytest


class TestSchemaImports:
    def test_import_booking_schema(self):
        from booking_engine.schemas.booking_schema import (
            AvailabilityProjection, BookingDraft, ReservationRecord, ReservationStatus,
        )
        assert ReservationStatus.PENDING == "pending"
        assert BookingDraft().time is None
        assert AvailabilityProjection(date="2025-12-20").duration_total == 0
        assert ReservationRecord is not None

    def test_import_catalog_schema(self):
        from booking_engine.schemas.catalog_schema import BlockedDate, PackageDefinition, PriceQuote
        assert BlockedDate(date="2025-12-20").reason == "Unavailable"
        assert PackageDefinition is not None and PriceQuote is not None

    def test_import_notification_schema(self):
        from booking_engine.schemas.notification_schema import BookingNotification
        assert BookingNotification.model_fields["type"].default == "received"


class TestPackageReExports:
    def test_scheduling_package(self):
        from booking_engine.scheduling import (
            AdminBlockRegistry, AvailabilityIndex, SlotBoard, check_slot_eligibility,
            generate_time_slots,
        )
        assert callable(check_slot_eligibility)
        assert callable(generate_time_slots)
        assert AdminBlockRegistry().blocked_dates() == []
        assert len(AvailabilityIndex("2025-12-20")) == 0
        assert SlotBoard is not None

    def test_submission_package(self):
        from booking_engine.submission import SubmissionState, SubmissionStateMachine
        assert SubmissionStateMachine().current_state == SubmissionState.DRAFTING

    def test_version(self):
        import booking_engine
        assert booking_engine.__version__


class TestConfigImport:
    def test_import_config(self):
        from booking_engine.config import settings
        assert settings.business.name is not None
        assert settings.business.slot_step_minutes in (15, 30)
        assert settings.submission.notes_max_length > 0


class TestConsoleDemo:
    @pytest.mark.asyncio
    async def test_race_scenario_runs(self, capsys):
        from main import run_race
        await run_race("2099-06-06")
        out = capsys.readouterr().out
        assert "optimistic" in out
        assert "rejected_conflict" in out

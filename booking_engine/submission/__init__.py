from booking_engine.submission.protocol import BookingSubmission, SubmissionOutcome
from booking_engine.submission.state_machine import (
    InvalidTransitionError,
    SubmissionState,
    SubmissionStateMachine,
    SubmissionTrigger,
)

__all__ = [
    "BookingSubmission",
    "SubmissionOutcome",
    "SubmissionStateMachine",
    "SubmissionState",
    "SubmissionTrigger",
    "InvalidTransitionError",
]

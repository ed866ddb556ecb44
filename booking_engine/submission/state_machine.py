"""
Finite state machine for one booking submission attempt.

    drafting -> validating -> committed
                           -> rejected_conflict
                           -> rejected_invalid
                           -> failed

Every attempt gets its own machine. Terminal states have no outgoing
transitions: a customer who wants to try again starts a new draft.

Usage:
    sm = SubmissionStateMachine()
    sm.transition(SubmissionTrigger.SUBMITTED)
    assert sm.current_state == SubmissionState.VALIDATING
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    """All states of a submission attempt."""
    DRAFTING = "drafting"
    VALIDATING = "validating"
    COMMITTED = "committed"
    REJECTED_CONFLICT = "rejected_conflict"
    REJECTED_INVALID = "rejected_invalid"
    FAILED = "failed"


class SubmissionTrigger(str, Enum):
    """Events that cause state transitions."""
    SUBMITTED = "submitted"
    FIELDS_INVALID = "fields_invalid"
    CONFLICT_FOUND = "conflict_found"
    COMMIT_SUCCEEDED = "commit_succeeded"
    COMMIT_FAILED = "commit_failed"


TERMINAL_STATES = frozenset({
    SubmissionState.COMMITTED,
    SubmissionState.REJECTED_CONFLICT,
    SubmissionState.REJECTED_INVALID,
    SubmissionState.FAILED,
})


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: SubmissionState
    to_state: SubmissionState
    trigger: SubmissionTrigger


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: SubmissionState
    entered_at: datetime
    trigger: Optional[SubmissionTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class SubmissionStateMachine:
    """Table-driven lifecycle of a single submit."""

    TRANSITIONS: list[Transition] = [
        Transition(SubmissionState.DRAFTING, SubmissionState.VALIDATING,
                   SubmissionTrigger.SUBMITTED),

        Transition(SubmissionState.VALIDATING, SubmissionState.REJECTED_INVALID,
                   SubmissionTrigger.FIELDS_INVALID),
        Transition(SubmissionState.VALIDATING, SubmissionState.REJECTED_CONFLICT,
                   SubmissionTrigger.CONFLICT_FOUND),
        Transition(SubmissionState.VALIDATING, SubmissionState.COMMITTED,
                   SubmissionTrigger.COMMIT_SUCCEEDED),
        Transition(SubmissionState.VALIDATING, SubmissionState.FAILED,
                   SubmissionTrigger.COMMIT_FAILED),
    ]

    def __init__(self) -> None:
        self._current_state = SubmissionState.DRAFTING
        self._history: list[StateEntry] = [
            StateEntry(state=SubmissionState.DRAFTING, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_state(self) -> SubmissionState:
        return self._current_state

    def transition(self, trigger: SubmissionTrigger) -> SubmissionState:
        """
        Execute a state transition.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                old_state = self._current_state
                self._current_state = t.to_state
                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))
                logger.debug(
                    "Submission transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[SubmissionTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]

    def is_terminal(self) -> bool:
        return self._current_state in TERMINAL_STATES

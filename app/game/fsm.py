from __future__ import annotations

from statemachine import State, StateMachine

from app.api.models import Session, SessionPhase


class SessionFSM(StateMachine):
    """Lifecycle of a challenge: challenged -> accepted -> resolved.

    Accepting is optional; a choice submitted straight against a challenge still
    resolves it. Handlers mutate the store; the FSM only guards transitions.
    """

    challenged = State(SessionPhase.challenged.value, value=SessionPhase.challenged.value, initial=True)
    accepted = State(SessionPhase.accepted.value, value=SessionPhase.accepted.value)
    resolved = State(SessionPhase.resolved.value, value=SessionPhase.resolved.value, final=True)

    accept = challenged.to(accepted)
    finish = challenged.to(resolved) | accepted.to(resolved)

    def __init__(self, session: Session):
        self.session = session
        super().__init__(start_value=session.phase.value)

    def sync_phase_to_model(self) -> None:
        self.session.phase = SessionPhase(str(self.current_state.value))

"""Pydantic models for iLert escalation policies."""

from pydantic import Field

from ilert_api.models.common import IlertModel, Schedule, TeamShort, User


class EscalationRule(IlertModel):
    """A single escalation step.

    Attributes:
        user: User to notify (either user or schedule is set)
        schedule: On-call schedule to notify
        escalation_timeout: Minutes until the next rule is escalated to
    """

    user: User | None = None
    schedule: Schedule | None = None
    escalation_timeout: int = 0


class EscalationPolicy(IlertModel):
    """An iLert escalation policy.

    Attributes:
        id: Policy id, set by the API
        name: Policy name
        escalation_rules: Ordered escalation steps, always sent to the API
        repeating: Whether escalation restarts after the last rule
        frequency: How often escalation is repeated
        teams: Teams owning the policy
    """

    id: int | None = None
    name: str
    escalation_rules: list[EscalationRule] = Field(default_factory=list)
    repeating: bool | None = None
    frequency: int | None = None
    teams: list[TeamShort] | None = None

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from testgate.models.club import Membership, RosterAssignment, Team
from testgate.policy.types import MemberRecord


@dataclass(frozen=True)
class Requester:
    """The caller's membership in one club, resolved once per request."""

    membership: Membership
    member: MemberRecord
    is_admin: bool


def get_membership(db: Session, *, user_id: UUID, club_id: UUID) -> Membership | None:
    return db.scalar(select(Membership).where(Membership.user_id == user_id, Membership.club_id == club_id))


def roster_event_ids(db: Session, *, membership_id: UUID, club_id: UUID) -> frozenset[UUID]:
    rows = db.scalars(
        select(RosterAssignment.event_id)
        .join(Team, RosterAssignment.team_id == Team.id)
        .where(RosterAssignment.membership_id == membership_id, Team.club_id == club_id)
    ).all()
    return frozenset(rows)


def to_member_record(membership: Membership, event_ids: frozenset[UUID]) -> MemberRecord:
    return MemberRecord(
        id=membership.id,
        club_id=membership.club_id,
        team_id=membership.team_id,
        roster_event_ids=event_ids,
    )


def resolve_requester(db: Session, *, user_id: UUID, club_id: UUID) -> Requester:
    membership = get_membership(db, user_id=user_id, club_id=club_id)
    if not membership:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Not a club member')
    event_ids = roster_event_ids(db, membership_id=membership.id, club_id=club_id)
    return Requester(
        membership=membership,
        member=to_member_record(membership, event_ids),
        is_admin=membership.role == 'ADMIN',
    )

import uuid

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from testgate.db.base_class import Base
from testgate.models.constants import MEMBERSHIP_ROLE_VALUES, sql_in
from testgate.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Club(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'clubs'

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    teams: Mapped[list['Team']] = relationship(back_populates='club', cascade='all, delete-orphan')
    memberships: Mapped[list['Membership']] = relationship(back_populates='club', cascade='all, delete-orphan')


class Team(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'teams'

    club_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey('clubs.id', ondelete='CASCADE'), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    club: Mapped['Club'] = relationship(back_populates='teams')


class Event(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'events'
    __table_args__ = (UniqueConstraint('slug', name='uq_events_slug'),)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False)


class Membership(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'memberships'
    __table_args__ = (
        UniqueConstraint('club_id', 'user_id', name='uq_memberships_club_user'),
        CheckConstraint(sql_in('role', MEMBERSHIP_ROLE_VALUES), name='membership_role_values'),
    )

    # Users live in the identity service; only their id is stored here.
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    club_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey('clubs.id', ondelete='CASCADE'), nullable=False)
    team_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey('teams.id', ondelete='SET NULL'), nullable=True
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False, default='MEMBER')

    club: Mapped['Club'] = relationship(back_populates='memberships')
    roster_assignments: Mapped[list['RosterAssignment']] = relationship(
        back_populates='membership', cascade='all, delete-orphan'
    )


class RosterAssignment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'roster_assignments'
    __table_args__ = (
        UniqueConstraint('membership_id', 'team_id', 'event_id', name='uq_roster_assignment_member_event'),
    )

    membership_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey('memberships.id', ondelete='CASCADE'), nullable=False
    )
    team_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey('teams.id', ondelete='CASCADE'), nullable=False)
    event_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey('events.id', ondelete='CASCADE'), nullable=False)

    membership: Mapped['Membership'] = relationship(back_populates='roster_assignments')
    team: Mapped['Team'] = relationship()


Index('ix_memberships_user_id', Membership.user_id)
Index('ix_memberships_club_id', Membership.club_id)
Index('ix_roster_assignments_membership_id', RosterAssignment.membership_id)

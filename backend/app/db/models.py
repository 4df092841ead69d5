"""SQLAlchemy ORM models for trips, itineraries, expenses and share links."""

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func

TRIP_NAME_MAX_LENGTH = 200


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class City(Base):
    """City table - read-only catalog data with a daily cost index."""

    __tablename__ = "city"

    city_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    country: Mapped[str] = mapped_column(Text, nullable=False)
    cost_index: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    attractions: Mapped[list["Attraction"]] = relationship("Attraction", back_populates="city")


class Attraction(Base):
    """Attraction table - read-only catalog data."""

    __tablename__ = "attraction"

    attraction_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    city_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("city.city_id"), nullable=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False, default="other")
    cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    city: Mapped["City"] = relationship("City", back_populates="attractions")


class Trip(Base):
    """Trip table - owns its stops, expenses and share link."""

    __tablename__ = "trip"
    __table_args__ = (Index("idx_trip_owner", "owner_id", "start_date"),)

    trip_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    name: Mapped[str] = mapped_column(String(TRIP_NAME_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="planning")
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )

    # Relationships
    stops: Mapped[list["TripStop"]] = relationship(
        "TripStop",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="TripStop.order",
    )
    expenses: Mapped[list["Expense"]] = relationship(
        "Expense", back_populates="trip", cascade="all, delete-orphan"
    )
    shared_trip: Mapped["SharedTrip | None"] = relationship(
        "SharedTrip", back_populates="trip", cascade="all, delete-orphan", uselist=False
    )

    @property
    def share_id(self) -> str | None:
        """Public share token, if the trip has a share link."""
        return self.shared_trip.share_id if self.shared_trip is not None else None


class TripStop(Base):
    """Trip stop table - one city visit, dense 1-based order within a trip."""

    __tablename__ = "trip_stop"
    __table_args__ = (
        UniqueConstraint("trip_id", "order", name="uq_stop_trip_order"),
        UniqueConstraint("trip_id", "city_id", name="uq_stop_trip_city"),
    )

    stop_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip.trip_id", ondelete="CASCADE"), nullable=False
    )
    city_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    trip: Mapped["Trip"] = relationship("Trip", back_populates="stops")
    activities: Mapped[list["TripActivity"]] = relationship(
        "TripActivity", back_populates="stop", cascade="all, delete-orphan"
    )


class TripActivity(Base):
    """Trip activity table - catalog-backed or custom planned activity."""

    __tablename__ = "trip_activity"

    activity_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    stop_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip_stop.stop_id", ondelete="CASCADE"), nullable=False
    )
    attraction_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False, default="other")
    cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    time: Mapped[str | None] = mapped_column(String(16), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    stop: Mapped["TripStop"] = relationship("TripStop", back_populates="activities")

    @property
    def is_custom(self) -> bool:
        """True when the activity has no catalog attraction."""
        return self.attraction_id is None


class Expense(Base):
    """Expense table - manually logged actual spend."""

    __tablename__ = "expense"
    __table_args__ = (Index("idx_expense_trip", "trip_id", "date"),)

    expense_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip.trip_id", ondelete="CASCADE"), nullable=False
    )
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Relationships
    trip: Mapped["Trip"] = relationship("Trip", back_populates="expenses")


class SharedTrip(Base):
    """Shared trip table - at most one public share link per trip."""

    __tablename__ = "shared_trip"
    __table_args__ = (
        UniqueConstraint("trip_id", name="uq_shared_trip_trip"),
        UniqueConstraint("share_id", name="uq_shared_trip_share_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip.trip_id", ondelete="CASCADE"), nullable=False
    )
    share_id: Mapped[str] = mapped_column(String(64), nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    can_copy: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )

    # Relationships
    trip: Mapped["Trip"] = relationship("Trip", back_populates="shared_trip")


class AuditLog(Base):
    """Audit log table - write-once facts about privileged mutations."""

    __tablename__ = "audit_log"
    __table_args__ = (Index("idx_audit_entity", "entity_type", "entity_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(32), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(64), nullable=False)
    actor_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    detail: Mapped[str] = mapped_column(Text, nullable=False, default="")
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False)

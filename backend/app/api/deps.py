"""FastAPI dependencies wiring sessions and collaborators into services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from backend.app.budget.ledger import ExpenseLedger
from backend.app.cloning.cloner import TripCloner
from backend.app.config import Settings, get_settings
from backend.app.db.engine import get_session
from backend.app.db.repositories import AuditRecorder, CatalogReader
from backend.app.db.sql_repositories import SqlAuditRecorder, SqlCatalogReader
from backend.app.itinerary.store import ItineraryStore
from backend.app.sharing.links import ShareLinkManager
from backend.app.trips.service import TripService

SessionDep = Annotated[Session, Depends(get_session)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_catalog(session: SessionDep) -> CatalogReader:
    """Catalog reader over the read-only catalog tables."""
    return SqlCatalogReader(session)


def get_audit_recorder(session: SessionDep) -> AuditRecorder:
    """Audit recorder writing to the audit_log table."""
    return SqlAuditRecorder(session)


CatalogDep = Annotated[CatalogReader, Depends(get_catalog)]
AuditDep = Annotated[AuditRecorder, Depends(get_audit_recorder)]


def get_trip_service(session: SessionDep, audit: AuditDep) -> TripService:
    return TripService(session, audit)


def get_itinerary_store(session: SessionDep, catalog: CatalogDep, audit: AuditDep) -> ItineraryStore:
    return ItineraryStore(session, catalog, audit)


def get_expense_ledger(
    session: SessionDep, catalog: CatalogDep, settings: SettingsDep
) -> ExpenseLedger:
    return ExpenseLedger(session, catalog, settings)


def get_share_manager(session: SessionDep, settings: SettingsDep) -> ShareLinkManager:
    return ShareLinkManager(session, settings)


def get_trip_cloner(
    session: SessionDep,
    audit: AuditDep,
    shares: Annotated[ShareLinkManager, Depends(get_share_manager)],
    settings: SettingsDep,
) -> TripCloner:
    return TripCloner(session, audit, shares, settings)

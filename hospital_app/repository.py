from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.orm import Session, sessionmaker

from .db import Base, SessionLocal, db_session
from .models import Consultation, Medecin, Patient, RendezVous, Role, Utilisateur

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)
ID = TypeVar("ID")


class Repository(Generic[T, ID]):
    """
    Repository generico su un'entità mappata.

    Ogni chiamata apre la propria sessione (db_session): commit se tutto ok,
    rollback e rilancio dell'eccezione altrimenti. Le entità restituite sono
    staccate dalla sessione ma con gli attributi già caricati.
    """

    def __init__(self, model: type[T], session_factory: sessionmaker[Session] = SessionLocal) -> None:
        self.model = model
        self.session_factory = session_factory
        self._pk = inspect(model).primary_key[0]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.model.__name__})"

    def _identity(self, entity: T) -> ID | None:
        return getattr(entity, self._pk.key)

    def _save(self, s: Session, entity: T) -> T:
        if self._identity(entity) is None:
            s.add(entity)
            s.flush()
            logger.debug("insert %s id=%s", self.model.__name__, self._identity(entity))
            return entity

        # identità già presente: sostituisce la riga corrispondente
        merged = s.merge(entity)
        s.flush()
        logger.debug("update %s id=%s", self.model.__name__, self._identity(merged))
        return merged

    # =========================
    # Scrittura
    # =========================
    def save(self, entity: T) -> T:
        """
        Inserisce se l'identità non è valorizzata, altrimenti aggiorna.

        In inserimento restituisce lo stesso oggetto passato (con id valorizzato);
        in aggiornamento restituisce l'istanza risultante dal merge, da usare
        al posto di quella passata.
        """
        with db_session(self.session_factory) as s:
            return self._save(s, entity)

    def save_all(self, entities: Iterable[T]) -> list[T]:
        with db_session(self.session_factory) as s:
            return [self._save(s, e) for e in entities]

    def delete_by_id(self, id: ID) -> None:
        with db_session(self.session_factory) as s:
            obj = s.get(self.model, id)
            if obj is None:
                logger.warning("delete %s id=%s: nessuna riga trovata", self.model.__name__, id)
                return
            s.delete(obj)
            logger.debug("delete %s id=%s", self.model.__name__, id)

    # =========================
    # Lettura
    # =========================
    def find_by_id(self, id: ID) -> T | None:
        with db_session(self.session_factory) as s:
            return s.get(self.model, id)

    def find_all(self) -> list[T]:
        with db_session(self.session_factory) as s:
            return list(s.scalars(select(self.model).order_by(self._pk)))

    def find_by(self, **criteria: Any) -> list[T]:
        """Filtro per uguaglianza sui campi, es. find_by(malade=True)."""
        with db_session(self.session_factory) as s:
            q = select(self.model).filter_by(**criteria).order_by(self._pk)
            return list(s.scalars(q))

    def count(self) -> int:
        with db_session(self.session_factory) as s:
            return s.scalar(select(func.count()).select_from(self.model)) or 0

    def exists_by_id(self, id: ID) -> bool:
        return self.find_by_id(id) is not None


class PatientRepository(Repository[Patient, int]):
    def __init__(self, session_factory: sessionmaker[Session] = SessionLocal) -> None:
        super().__init__(Patient, session_factory)

    def find_by_malade(self, malade: bool) -> list[Patient]:
        return self.find_by(malade=malade)


class UtilisateurRepository(Repository[Utilisateur, int]):
    def __init__(self, session_factory: sessionmaker[Session] = SessionLocal) -> None:
        super().__init__(Utilisateur, session_factory)

    def find_by_username(self, username: str) -> Utilisateur | None:
        found = self.find_by(username=username)
        return found[0] if found else None


class RoleRepository(Repository[Role, int]):
    def __init__(self, session_factory: sessionmaker[Session] = SessionLocal) -> None:
        super().__init__(Role, session_factory)

    def find_by_role_name(self, role_name: str) -> Role | None:
        found = self.find_by(role_name=role_name)
        return found[0] if found else None


@dataclass(frozen=True)
class Repositories:
    patients: PatientRepository
    medecins: Repository[Medecin, int]
    rendez_vous: Repository[RendezVous, int]
    consultations: Repository[Consultation, int]
    utilisateurs: UtilisateurRepository
    roles: RoleRepository


def build_repositories(session_factory: sessionmaker[Session] = SessionLocal) -> Repositories:
    return Repositories(
        patients=PatientRepository(session_factory),
        medecins=Repository(Medecin, session_factory),
        rendez_vous=Repository(RendezVous, session_factory),
        consultations=Repository(Consultation, session_factory),
        utilisateurs=UtilisateurRepository(session_factory),
        roles=RoleRepository(session_factory),
    )

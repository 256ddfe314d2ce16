from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


class StatusRDV(enum.Enum):
    EN_ATTENTE = "EN_ATTENTE"
    CONFIRME = "CONFIRME"
    ANNULE = "ANNULE"
    TERMINE = "TERMINE"


# Tabella ponte utenti <-> ruoli (many-to-many)
utilisateurs_roles = Table(
    "utilisateurs_roles",
    Base.metadata,
    Column("utilisateur_id", ForeignKey("utilisateurs.id"), primary_key=True),
    Column("role_id", ForeignKey("roles.id"), primary_key=True),
)


class Patient(Base):
    __tablename__ = "patients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nom: Mapped[str | None] = mapped_column(String(120), nullable=True)
    date_inscription: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    malade: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"Patient({self.id}, {self.nom}, malade={self.malade}, score={self.score})"


class Medecin(Base):
    __tablename__ = "medecins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nom: Mapped[str | None] = mapped_column(String(120), nullable=True)
    email: Mapped[str | None] = mapped_column(String(120), nullable=True)
    specialite: Mapped[str | None] = mapped_column(String(120), nullable=True)

    # passive_deletes: la cancellazione va diretta al DB, senza azzerare le FK dei figli
    rendez_vous: Mapped[list["RendezVous"]] = relationship(back_populates="medecin", passive_deletes=True)

    def __repr__(self) -> str:
        return f"Medecin({self.nom}, {self.specialite})"


class RendezVous(Base):
    __tablename__ = "rendez_vous"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    status: Mapped[StatusRDV | None] = mapped_column(Enum(StatusRDV), nullable=True)

    patient_id: Mapped[int | None] = mapped_column(ForeignKey("patients.id"), nullable=True)
    medecin_id: Mapped[int | None] = mapped_column(ForeignKey("medecins.id"), nullable=True)

    # to-one caricati subito, come il fetch EAGER di default lato JPA
    patient: Mapped["Patient"] = relationship(lazy="joined")
    medecin: Mapped["Medecin"] = relationship(back_populates="rendez_vous", lazy="joined")
    consultation: Mapped["Consultation"] = relationship(back_populates="rendez_vous", passive_deletes=True)

    def __repr__(self) -> str:
        stato = self.status.value if self.status else None
        return f"RendezVous({self.id}, {self.date}, {stato})"


class Consultation(Base):
    __tablename__ = "consultations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date_consultation: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    rapport: Mapped[str | None] = mapped_column(Text, nullable=True)

    # unique: al massimo una consultazione per rendez-vous
    rendez_vous_id: Mapped[int | None] = mapped_column(ForeignKey("rendez_vous.id"), unique=True, nullable=True)

    rendez_vous: Mapped["RendezVous"] = relationship(back_populates="consultation", lazy="joined")

    def __repr__(self) -> str:
        return f"Consultation({self.id}, rendez_vous_id={self.rendez_vous_id})"


class Utilisateur(Base):
    """
    Utente applicativo.
    La password è salvata in chiaro, come nella demo di partenza.
    """
    __tablename__ = "utilisateurs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str | None] = mapped_column(String(50), nullable=True)
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)

    roles: Mapped[list["Role"]] = relationship(
        secondary=utilisateurs_roles, back_populates="utilisateurs", lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"Utilisateur({self.id}, {self.username})"


class Role(Base):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    role_name: Mapped[str | None] = mapped_column(String(50), nullable=True)

    utilisateurs: Mapped[list["Utilisateur"]] = relationship(secondary=utilisateurs_roles, back_populates="roles")

    def __repr__(self) -> str:
        return f"Role({self.role_name})"

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from .models import Consultation, Medecin, Patient, RendezVous, Role, StatusRDV, Utilisateur
from .repository import Repositories

Output = Callable[[str], None]


# =========================
# Esiti (per test e CLI)
# =========================
@dataclass
class DemoResult:
    patient_ids: list[int] = field(default_factory=list)
    patient_trovato_id: int | None = None
    patient_eliminato_id: int | None = None
    malade_noms: list[str] = field(default_factory=list)
    medecin_id: int | None = None
    rendez_vous_id: int | None = None
    consultation_id: int | None = None


@dataclass(frozen=True)
class RolesDemoResult:
    utilisateur_id: int
    role_ids: list[int]


# =========================
# Demo pazienti / medico / rendez-vous
# =========================
def run_demo(repos: Repositories, out: Output = print) -> DemoResult:
    """
    Sequenza demo eseguita all'avvio:
    - inserisce tre pazienti e li rilegge
    - cerca il primo per id e filtra i malati
    - aggiorna lo score del primo e cancella il secondo
    - crea medico, rendez-vous e consultazione collegati al primo paziente

    Un errore di storage interrompe la sequenza (nessun recupero parziale).
    """
    esito = DemoResult()
    patients_repo = repos.patients

    patients_repo.save(Patient(nom="messi", date_inscription=datetime.now(), malade=True, score=10))
    patients_repo.save(Patient(nom="hafid", date_inscription=datetime.now(), malade=False, score=20))
    patients_repo.save(Patient(nom="Karim", date_inscription=datetime.now(), malade=True, score=5))

    out("Lista di tutti i pazienti:")
    patients = patients_repo.find_all()
    for p in patients:
        out(f"{p.id} | {p.nom} | {p.score} | malade: {p.malade}")
    esito.patient_ids = [p.id for p in patients]

    patient = patients_repo.find_by_id(patients[0].id) if patients else None
    if patient is not None:
        esito.patient_trovato_id = patient.id
        out(f"\nPaziente trovato: {patient.nom}")

    out("\nPazienti malati:")
    for p in patients_repo.find_by_malade(True):
        esito.malade_noms.append(p.nom)
        out(p.nom)

    if patient is not None:
        patient.score = 99
        patient = patients_repo.save(patient)
        out(f"\nPaziente aggiornato: {patient.nom}, nuovo score: {patient.score}")

    if len(patients) > 1:
        id_da_eliminare = patients[1].id
        patients_repo.delete_by_id(id_da_eliminare)
        esito.patient_eliminato_id = id_da_eliminare
        out(f"\nPaziente eliminato con ID: {id_da_eliminare}")

    medecin = repos.medecins.save(Medecin(nom="Dr. Salma", specialite="Cardiologie"))
    esito.medecin_id = medecin.id

    rdv = repos.rendez_vous.save(
        RendezVous(date=datetime.now(), status=StatusRDV.EN_ATTENTE, patient=patient, medecin=medecin)
    )
    esito.rendez_vous_id = rdv.id

    consultation = repos.consultations.save(
        Consultation(
            date_consultation=datetime.now(),
            rapport="Consultation initiale : état stable.",
            rendez_vous=rdv,
        )
    )
    esito.consultation_id = consultation.id
    out(f"\nRendez-vous {rdv.id} ({medecin.nom}) e consultazione {consultation.id} registrati.")

    return esito


# =========================
# Demo utenti / ruoli
# =========================
def _role(repos: Repositories, nome: str) -> Role:
    esistente = repos.roles.find_by_role_name(nome)
    if esistente is not None:
        return esistente
    return repos.roles.save(Role(role_name=nome))


def run_roles_demo(repos: Repositories, out: Output = print) -> RolesDemoResult:
    """Crea i ruoli ADMIN e USER e un utente che li possiede entrambi."""
    admin = _role(repos, "ADMIN")
    user = _role(repos, "USER")

    utilisateur = repos.utilisateurs.find_by_username("achraf")
    if utilisateur is None:
        utilisateur = Utilisateur(username="achraf", password="password123", roles=[admin, user])
    else:
        utilisateur.roles = [admin, user]
    utilisateur = repos.utilisateurs.save(utilisateur)

    out("Utente con ruoli creato con successo!")
    return RolesDemoResult(utilisateur_id=utilisateur.id, role_ids=[admin.id, user.id])

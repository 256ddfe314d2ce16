"""
Test delle sequenze demo.
"""
from __future__ import annotations

from hospital_app.models import StatusRDV, Utilisateur
from hospital_app.runner import run_demo, run_roles_demo


def test_run_demo_sequence(repos):
    righe: list[str] = []

    esito = run_demo(repos, out=righe.append)

    assert len(esito.patient_ids) == 3
    assert esito.patient_trovato_id == esito.patient_ids[0]
    assert sorted(esito.malade_noms) == ["Karim", "messi"]
    assert esito.patient_eliminato_id == esito.patient_ids[1]

    restanti = {p.nom: p for p in repos.patients.find_all()}
    assert set(restanti) == {"messi", "Karim"}
    assert restanti["messi"].score == 99
    assert restanti["Karim"].score == 5

    assert righe[0] == "Lista di tutti i pazienti:"
    assert any("Paziente trovato: messi" in r for r in righe)


def test_run_demo_links_medecin_rendez_vous_consultation(repos):
    esito = run_demo(repos, out=lambda _: None)

    rdv = repos.rendez_vous.find_by_id(esito.rendez_vous_id)
    assert rdv.status is StatusRDV.EN_ATTENTE
    assert rdv.patient_id == esito.patient_trovato_id
    assert rdv.medecin_id == esito.medecin_id
    assert rdv.medecin.nom == "Dr. Salma"

    consultation = repos.consultations.find_by_id(esito.consultation_id)
    assert consultation.rendez_vous_id == esito.rendez_vous_id
    assert consultation.rapport == "Consultation initiale : état stable."
    assert repos.consultations.count() == 1


def test_run_roles_demo_creates_user_with_roles(repos):
    righe: list[str] = []

    esito = run_roles_demo(repos, out=righe.append)

    utente = repos.utilisateurs.find_by_id(esito.utilisateur_id)
    assert utente.username == "achraf"
    assert utente.password == "password123"
    assert {r.role_name for r in utente.roles} == {"ADMIN", "USER"}
    assert righe == ["Utente con ruoli creato con successo!"]


def test_run_roles_demo_twice_reuses_rows(repos):
    primo = run_roles_demo(repos, out=lambda _: None)
    secondo = run_roles_demo(repos, out=lambda _: None)

    assert primo.utilisateur_id == secondo.utilisateur_id
    assert sorted(primo.role_ids) == sorted(secondo.role_ids)
    assert repos.roles.count() == 2
    assert repos.utilisateurs.count() == 1
    assert {r.role_name for r in repos.utilisateurs.find_by_id(primo.utilisateur_id).roles} == {"ADMIN", "USER"}


def test_user_without_roles(repos):
    u = repos.utilisateurs.save(Utilisateur(username="vide", password="x"))

    assert repos.utilisateurs.find_by_id(u.id).roles == []
    assert repos.utilisateurs.find_by_username("vide").id == u.id
    assert repos.utilisateurs.find_by_username("assente") is None

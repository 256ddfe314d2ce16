from __future__ import annotations

import argparse
import logging
import os

from sqlalchemy import Engine

from hospital_app import db
from hospital_app.repository import Repositories, build_repositories
from hospital_app.runner import run_demo, run_roles_demo


def cmd_init(args: argparse.Namespace, repos: Repositories) -> None:
    db.init_db(args.engine)
    print(f"DB inizializzato: {args.engine.url}")


def cmd_reset(args: argparse.Namespace, repos: Repositories) -> None:
    db.drop_db(args.engine)
    db.init_db(args.engine)
    print("Tabelle ricreate.")


def cmd_demo(args: argparse.Namespace, repos: Repositories) -> None:
    run_demo(repos)


def cmd_roles(args: argparse.Namespace, repos: Repositories) -> None:
    run_roles_demo(repos)


def cmd_list(args: argparse.Namespace, repos: Repositories) -> None:
    if args.entity == "patients":
        for p in repos.patients.find_all():
            print(f"{p.id} | {p.nom} | {p.score} | malade: {p.malade}")
    elif args.entity == "medecins":
        for m in repos.medecins.find_all():
            print(f"{m.id} | {m.nom} | {m.specialite} | {m.email or '-'}")
    elif args.entity == "rendez_vous":
        for r in repos.rendez_vous.find_all():
            paziente = r.patient.nom if r.patient else "-"
            medico = r.medecin.nom if r.medecin else "-"
            stato = r.status.value if r.status else "-"
            data = r.date.strftime("%Y-%m-%d %H:%M") if r.date else "-"
            print(f"{r.id} | {data} | {stato} | {paziente} | {medico}")
    elif args.entity == "consultations":
        for c in repos.consultations.find_all():
            print(f"{c.id} | rendez-vous {c.rendez_vous_id} | {c.rapport or '-'}")
    elif args.entity == "utilisateurs":
        for u in repos.utilisateurs.find_all():
            ruoli = ", ".join(sorted(r.role_name or "" for r in u.roles)) or "-"
            print(f"{u.id} | {u.username} | {ruoli}")
    elif args.entity == "roles":
        for r in repos.roles.find_all():
            print(f"{r.id} | {r.role_name}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hospital-app", description="CLI Hospital (demo accesso dati)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log a livello DEBUG")
    sub = p.add_subparsers(required=True)

    p_init = sub.add_parser("init", help="Crea le tabelle")
    p_init.set_defaults(func=cmd_init)

    p_reset = sub.add_parser("reset", help="Elimina e ricrea le tabelle")
    p_reset.set_defaults(func=cmd_reset)

    p_demo = sub.add_parser("demo", help="Sequenza demo pazienti / medico / rendez-vous")
    p_demo.set_defaults(func=cmd_demo)

    p_roles = sub.add_parser("roles", help="Sequenza demo utenti e ruoli")
    p_roles.set_defaults(func=cmd_roles)

    p_list = sub.add_parser("list", help="Lista entità")
    p_list.add_argument(
        "entity", choices=["patients", "medecins", "rendez_vous", "consultations", "utilisateurs", "roles"]
    )
    p_list.set_defaults(func=cmd_list)

    return p


def setup_logging(verbose: bool = False) -> None:
    level = "DEBUG" if verbose else os.getenv("HOSPITAL_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None, bind: Engine | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    args.engine = bind or db.engine
    factory = db.SessionLocal if args.engine is db.engine else db.make_session_factory(args.engine)
    db.init_db(args.engine)  # garantisce tabelle
    args.func(args, build_repositories(factory))


if __name__ == "__main__":
    main()

"""
Applicazione demo Hospital: accesso dati per pazienti, medici, rendez-vous,
consultazioni, utenti e ruoli.

Struttura:
- db.py         : configurazione, engine e sessioni SQLAlchemy
- models.py     : entità ORM ed enum
- repository.py : repository generico (save / find / delete) per entità
- runner.py     : sequenze demo (pazienti, medico, rendez-vous, utenti e ruoli)
- cli.py        : comandi da terminale
"""

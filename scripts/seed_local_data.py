# scripts/seed_local_data.py
# -*- coding: utf-8 -*-
"""
Seed local pour NeuroTracker : crée des comptes de démo, avec ou sans questionnaire complété.

Caractéristiques :
- Idempotent : réexécutable sans doublons (un compte existant n'est pas recréé,
  un questionnaire déjà complété n'est jamais réécrit)
- Paramétrable via CLI : nb de comptes, part de comptes ayant complété le questionnaire
- Scores générés via score_engine (6 réponses 0..4, comme dans l'application)
- Option (--wipe) pour drop+recreate le schéma (utile en dev)

Utilise :
- neurotracker/persistence/db.py            -> init_db()
- neurotracker/persistence/models.py        -> Base
- neurotracker/persistence/storage.py       -> SqlKeyValueStore
- neurotracker/persistence/repositories/... -> UserRepository, CompletionRepository
- neurotracker/services/score_engine.py     -> compute_score, interpret

Exemples :
    # 3 comptes demo1..demo3@example.com, mot de passe "password123", ~2/3 avec questionnaire complété
    python scripts/seed_local_data.py

    # 5 comptes, tous complétés, résultats reproductibles
    python scripts/seed_local_data.py --users 5 --completed-rate 1 --seed 42

    # Recommencer à zéro
    python scripts/seed_local_data.py --wipe
"""

from __future__ import annotations

import argparse
import datetime as dt
import random

from neurotracker.persistence.db import init_db
from neurotracker.persistence.models import Base
from neurotracker.persistence.storage import SqlKeyValueStore
from neurotracker.persistence.repositories.users_repo import UserRepository
from neurotracker.persistence.repositories.surveys_repo import CompletionRepository
from neurotracker.services.score_engine import MAX_ANSWER, NUM_QUESTIONS, compute_score, interpret


# -------------------------------------------------------------------
# Utils
# -------------------------------------------------------------------

def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def sample_answers() -> dict[int, int]:
    """Six réponses 0..4, légèrement centrées sur "Sometimes"."""
    return {i: int(clamp(round(random.gauss(2.0, 1.1)), 0, MAX_ANSWER)) for i in range(NUM_QUESTIONS)}


# -------------------------------------------------------------------
# Seeding
# -------------------------------------------------------------------

def seed(
    *,
    users: int,
    email_prefix: str,
    domain: str,
    password: str,
    completed_rate: float,
    end_date: dt.date,
) -> None:
    store = SqlKeyValueStore()
    user_repo = UserRepository(store)
    completion_repo = CompletionRepository(store)

    print(f"➡️  Seeding {users} compte(s) | complétés ~{int(completed_rate*100)}%")

    created = completed = 0
    for i in range(1, users + 1):
        email = f"{email_prefix}{i}@{domain}".lower()
        if user_repo.find_user(email) is None:
            user_repo.add_user(email, password, f"Demo User {i}")
            created += 1

        status = "—"
        existing = completion_repo.get_completion(email)
        if existing is not None:
            status = f"score={existing.score} (existant)"
        elif random.random() < completed_rate:
            score = compute_score(sample_answers())
            day = end_date - dt.timedelta(days=random.randint(0, 30))
            completion_repo.set_completion(email, score, date=day)
            completed += 1
            status = f"score={score} ({interpret(score).name})"
        print(f"   • {email:<30}  {status}")

    print(f"✅ Terminé : {created} compte(s) créé(s), {completed} questionnaire(s) ajouté(s).")


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------

def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Seed local data for NeuroTracker")
    p.add_argument("--users", type=int, default=3, help="Nombre de comptes (défaut: 3)")
    p.add_argument("--email-prefix", type=str, default="demo", help="Préfixe des emails de démo (défaut: demo -> demo1@...)")
    p.add_argument("--domain", type=str, default="example.com", help="Domaine des emails de démo")
    p.add_argument("--password", type=str, default="password123", help="Mot de passe des comptes de démo")
    p.add_argument("--completed-rate", type=float, default=0.66,
                   help="Probabilité qu'un compte ait complété le questionnaire (0..1, défaut: 0.66)")
    p.add_argument("--end", type=str, default=None, help="Date de référence (YYYY-MM-DD). Défaut: aujourd'hui")
    p.add_argument("--seed", type=int, default=None, help="Graine aléatoire (scores et dates reproductibles)")
    p.add_argument("--wipe", action="store_true", help="Vide la table clé/valeur avant de semer")
    return p.parse_args()


def main():
    args = parse_args()

    if args.seed is not None:
        random.seed(args.seed)

    end_date = dt.date.fromisoformat(args.end) if args.end else dt.date.today()

    if args.wipe:
        print("⚠️  Wipe : la table kv_entries est recréée (comptes et résultats perdus)…")

    init_db(Base, drop_and_recreate=bool(args.wipe))

    seed(
        users=max(1, args.users),
        email_prefix=args.email_prefix,
        domain=args.domain,
        password=args.password,
        completed_rate=clamp(args.completed_rate, 0.0, 1.0),
        end_date=end_date,
    )


if __name__ == "__main__":
    main()

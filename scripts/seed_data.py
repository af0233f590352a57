"""
Sample data script for Jobly.

Generates deterministic pseudo-random companies and jobs and loads them into
Postgres through psycopg in a single transaction.
"""

from __future__ import annotations

import random
import sys
import time
from decimal import Decimal
from typing import Any

import psycopg
import typer

from jobly.infrastructure.db_factory import apply_schema, build_dsn

app = typer.Typer(help="Load sample companies and jobs into Postgres.")

_PREFIXES = ["acme", "globex", "initech", "umbrella", "hooli", "stark", "wayne", "wonka"]
_SUFFIXES = ["labs", "works", "systems", "group", "partners", "digital"]
_ROLES = ["Engineer", "Analyst", "Designer", "Manager", "Scientist", "Consultant"]
_LEVELS = ["Junior", "Senior", "Staff", "Principal", "Lead"]


def _build_dsn(dsn_override: str | None) -> str:
    if dsn_override:
        return dsn_override
    return build_dsn()


def _generate_companies(count: int, seed: int) -> list[tuple[Any, ...]]:
    """Rows of (handle, name, description, num_employees, logo_url)."""
    rng = random.Random(seed)
    rows: list[tuple[Any, ...]] = []
    for i in range(count):
        prefix = rng.choice(_PREFIXES)
        suffix = rng.choice(_SUFFIXES)
        handle = f"{prefix}-{suffix}-{i}"
        name = f"{prefix.title()} {suffix.title()} {i}"
        rows.append(
            (
                handle,
                name,
                f"{name} builds things.",
                rng.randint(1, 5_000),
                f"/logos/{handle}.png" if rng.random() < 0.5 else None,
            )
        )
    return rows


def _generate_jobs(handles: list[str], per_company: int, seed: int) -> list[tuple[Any, ...]]:
    """Rows of (title, salary, equity, company_handle)."""
    rng = random.Random(seed)
    rows: list[tuple[Any, ...]] = []
    for handle in handles:
        for _ in range(per_company):
            equity = None
            if rng.random() < 0.6:
                equity = Decimal(rng.randint(0, 100)) / Decimal(1000)
            rows.append(
                (
                    f"{rng.choice(_LEVELS)} {rng.choice(_ROLES)}",
                    rng.randrange(40_000, 250_000, 1_000),
                    equity,
                    handle,
                )
            )
    return rows


def _load_into_db(
    dsn: str, companies: list[tuple[Any, ...]], jobs: list[tuple[Any, ...]]
) -> None:
    with psycopg.connect(dsn) as conn:
        with conn.cursor() as cur:
            cur.executemany(
                """
                INSERT INTO companies (handle, name, description, num_employees, logo_url)
                VALUES (%s, %s, %s, %s, %s)
                """,
                companies,
            )
            cur.executemany(
                """
                INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES (%s, %s, %s, %s)
                """,
                jobs,
            )
        conn.commit()


@app.command()
def main(
    companies: int = typer.Option(20, "--companies", "-c", help="Number of companies."),
    jobs_per_company: int = typer.Option(
        3, "--jobs-per-company", "-j", help="Jobs generated for each company."
    ),
    seed: int = typer.Option(42, "--seed", help="Deterministic RNG seed."),
    dsn: str | None = typer.Option(None, "--dsn", help="Optional DSN override for Postgres."),
    reset: bool = typer.Option(
        False, "--reset", help="Drop and recreate the tables before loading."
    ),
) -> None:
    """
    Generate sample companies and jobs and load them into Postgres.
    """
    start = time.perf_counter()
    conn_dsn = _build_dsn(dsn)
    if reset:
        typer.echo("Recreating schema...")
        apply_schema(conn_dsn)

    company_rows = _generate_companies(companies, seed=seed)
    job_rows = _generate_jobs([row[0] for row in company_rows], jobs_per_company, seed=seed)
    typer.echo(f"Loading {len(company_rows):,} companies and {len(job_rows):,} jobs (seed={seed})")
    _load_into_db(conn_dsn, company_rows, job_rows)

    typer.echo(f"Load completed in {time.perf_counter() - start:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)

from __future__ import annotations

import asyncio
import json
import sys
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Dict, List, Optional

import typer

from jobly.config import get_settings
from jobly.errors import JoblyError, ValidationError
from jobly.infrastructure.db_factory import Database, apply_schema, build_dsn
from jobly.repositories import CompanyRepository, JobRepository
from jobly.utils.logging import configure_logging

app = typer.Typer(help="Jobly companies and jobs CLI.")


@app.callback()
def _setup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


def _run(operation: Callable[[Database], Awaitable[Any]]) -> Any:
    """Run ``operation`` against a fresh pool; report expected errors and exit 1."""

    async def _with_db() -> Any:
        async with Database() as db:
            return await operation(db)

    try:
        return asyncio.run(_with_db())
    except JoblyError as exc:
        typer.echo(f"Error ({exc.status_code}): {exc.message}", err=True)
        raise typer.Exit(code=1) from exc


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _parse_int(key: str, raw: str) -> Optional[int]:
    if raw == "null":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Field {key!r} expects an integer or null, got {raw!r}") from None


def _parse_decimal(key: str, raw: str) -> Optional[Decimal]:
    if raw == "null":
        return None
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise ValidationError(f"Field {key!r} expects a number or null, got {raw!r}") from None


def _parse_nullable_text(key: str, raw: str) -> Optional[str]:
    del key
    return None if raw == "null" else raw


# Fields not listed here are text and keep the raw string.
COMPANY_VALUE_PARSERS: Dict[str, Callable[[str, str], Any]] = {
    "numEmployees": _parse_int,
    "logoUrl": _parse_nullable_text,
}
JOB_VALUE_PARSERS: Dict[str, Callable[[str, str], Any]] = {
    "salary": _parse_int,
    "equity": _parse_decimal,
}


def _parse_assignments(
    assignments: List[str],
    immutable: tuple,
    parsers: Dict[str, Callable[[str, str], Any]],
) -> Dict[str, Any]:
    """
    Turn ``key=value`` pairs into an ordered update payload.

    Values for fields in ``parsers`` are converted (``50``, ``0.5``, ``null``);
    every other value stays a plain string.
    """
    data: Dict[str, Any] = {}
    for item in assignments:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise ValidationError(f"Expected key=value, got {item!r}")
        if key in immutable:
            raise ValidationError(f"Field {key!r} cannot be updated")
        parse = parsers.get(key)
        data[key] = parse(key, raw) if parse is not None else raw
    return data



@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"pool=({settings.db_pool_min_size},{settings.db_pool_max_size}) "
        f"env={settings.app_env}"
    )


@app.command("init-db")
def init_db(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """
    Drop and recreate the companies and jobs tables.
    """
    if not yes:
        typer.confirm("This drops all companies and jobs. Continue?", abort=True)
    apply_schema(build_dsn())
    typer.echo("Schema created.")


@app.command()
def companies(
    min_employees: Optional[int] = typer.Option(None, "--min-employees"),
    max_employees: Optional[int] = typer.Option(None, "--max-employees"),
    name: Optional[str] = typer.Option(None, "--name", help="Case-insensitive substring."),
) -> None:
    """
    List companies, optionally filtered.
    """
    filters = {"minEmployees": min_employees, "maxEmployees": max_employees, "name": name}
    result = _run(lambda db: CompanyRepository(db).find_all(filters))
    _echo_json([company.to_dict() for company in result])


@app.command()
def company(handle: str) -> None:
    """
    Show one company with its jobs.
    """
    result = _run(lambda db: CompanyRepository(db).get(handle))
    _echo_json(result.to_dict())


@app.command("create-company")
def create_company(
    handle: str,
    name: str = typer.Option(..., "--name"),
    description: str = typer.Option(..., "--description"),
    num_employees: Optional[int] = typer.Option(None, "--num-employees"),
    logo_url: Optional[str] = typer.Option(None, "--logo-url"),
) -> None:
    """
    Create a company.
    """
    data = {
        "handle": handle,
        "name": name,
        "description": description,
        "numEmployees": num_employees,
        "logoUrl": logo_url,
    }
    result = _run(lambda db: CompanyRepository(db).create(data))
    _echo_json(result.to_dict())


@app.command("update-company")
def update_company(
    handle: str,
    assignments: List[str] = typer.Option(..., "--set", help="Field to change, as key=value."),
) -> None:
    """
    Partially update a company, e.g. --set numEmployees=50.
    """

    async def _update(db: Database) -> Any:
        data = _parse_assignments(assignments, ("handle",), COMPANY_VALUE_PARSERS)
        return await CompanyRepository(db).update(handle, data)

    _echo_json(_run(_update).to_dict())


@app.command("delete-company")
def delete_company(handle: str) -> None:
    """
    Delete a company and its jobs.
    """
    _run(lambda db: CompanyRepository(db).remove(handle))
    typer.echo(f"Deleted company {handle}.")


@app.command()
def jobs(
    min_salary: Optional[int] = typer.Option(None, "--min-salary"),
    has_equity: bool = typer.Option(False, "--has-equity", help="Only jobs with equity > 0."),
    title: Optional[str] = typer.Option(None, "--title", help="Case-insensitive substring."),
) -> None:
    """
    List jobs, optionally filtered.
    """
    filters = {"minSalary": min_salary, "hasEquity": has_equity, "title": title}
    result = _run(lambda db: JobRepository(db).find_all(filters))
    _echo_json([job.to_dict() for job in result])


@app.command()
def job(job_id: int) -> None:
    """
    Show one job with its company.
    """
    result = _run(lambda db: JobRepository(db).get(job_id))
    _echo_json(result.to_dict())


@app.command("create-job")
def create_job(
    company_handle: str,
    title: str = typer.Option(..., "--title"),
    salary: Optional[int] = typer.Option(None, "--salary"),
    equity: Optional[str] = typer.Option(None, "--equity", help="Fraction, e.g. 0.05."),
) -> None:
    """
    Create a job for a company.
    """
    data = {
        "title": title,
        "salary": salary,
        "equity": Decimal(equity) if equity is not None else None,
        "companyHandle": company_handle,
    }
    result = _run(lambda db: JobRepository(db).create(data))
    _echo_json(result.to_dict())


@app.command("update-job")
def update_job(
    job_id: int,
    assignments: List[str] = typer.Option(..., "--set", help="Field to change, as key=value."),
) -> None:
    """
    Partially update a job, e.g. --set salary=120000.
    """

    async def _update(db: Database) -> Any:
        data = _parse_assignments(assignments, ("id", "companyHandle"), JOB_VALUE_PARSERS)
        return await JobRepository(db).update(job_id, data)

    _echo_json(_run(_update).to_dict())


@app.command("delete-job")
def delete_job(job_id: int) -> None:
    """
    Delete a job.
    """
    _run(lambda db: JobRepository(db).remove(job_id))
    typer.echo(f"Deleted job {job_id}.")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()

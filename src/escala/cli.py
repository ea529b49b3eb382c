from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from escala.config import AppConfig
from escala.core.calendar import date_to_id, format_date_display, generate_shift_days, month_name, target_month_info
from escala.errors import StoreError
from escala.io.export import export_to_csv, export_to_excel, month_to_dataframe
from escala.io.pdf_export import export_month_to_pdf
from escala.store.sqlite_store import SqliteRosterStore
from escala.utils.logging_setup import setup_logging


def _month_args(p: argparse.ArgumentParser) -> None:
    current = target_month_info()
    p.add_argument("--year", type=int, default=current.year, help="Ano (padrão: mês corrente)")
    p.add_argument("--month", type=int, default=current.month + 1, choices=range(1, 13),
                   metavar="1-12", help="Mês, de 1 a 12 (padrão: mês corrente)")


def _cmd_init_db(args: argparse.Namespace) -> int:
    store = SqliteRosterStore(args.db)
    store.ensure_schema()
    print(f"Banco inicializado: {store.db_path}")
    return 0


def _cmd_calendar(args: argparse.Namespace) -> int:
    days = generate_shift_days(args.year, args.month - 1)
    if args.json_out:
        payload = [
            {"date": date_to_id(d.date), "weekday": d.weekday_label, "periods": [p.value for p in d.periods]}
            for d in days
        ]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    print(f"{month_name(args.month - 1)} {args.year}:")
    for d in days:
        print(f" - {format_date_display(d.date)} {d.weekday_label:<13} {' / '.join(p.value for p in d.periods)}")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    store = SqliteRosterStore(args.db)
    try:
        people = store.fetch_people(args.owner)
        assignments = store.fetch_assignments(args.owner)
    except StoreError as e:
        print(f"Erro ao ler {args.db}: {e}", file=sys.stderr)
        remediation = getattr(e, "remediation", "")
        if remediation:
            print(remediation, file=sys.stderr)
        return 1

    month = args.month - 1
    df = month_to_dataframe(people, assignments, args.year, month)
    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    suffix = out.suffix.lower()
    if suffix == ".xlsx":
        export_to_excel(df, out, args.year, month)
    elif suffix == ".pdf":
        export_month_to_pdf(df, out, args.year, month)
    else:
        export_to_csv(df, out)
    print(f"{len(df)} linhas exportadas para {out}")
    return 0


def main(argv: list[str] | None = None) -> int:
    config = AppConfig.from_env()

    p = argparse.ArgumentParser(prog="escala", description="Escala de voluntários")
    p.add_argument("--db", default=config.db_path, help=f"Banco SQLite (padrão: {config.db_path})")
    p.add_argument("-v", "--verbose", action="count", default=0)
    sub = p.add_subparsers(dest="command", required=True)

    p_init = sub.add_parser("init-db", help="Cria as tabelas do banco")
    p_init.set_defaults(func=_cmd_init_db)

    p_cal = sub.add_parser("calendar", help="Lista os dias de escala de um mês")
    _month_args(p_cal)
    p_cal.add_argument("--json", dest="json_out", action="store_true", help="Saída JSON")
    p_cal.set_defaults(func=_cmd_calendar)

    p_exp = sub.add_parser("export", help="Exporta a escala de um mês (.csv, .xlsx ou .pdf)")
    _month_args(p_exp)
    p_exp.add_argument("--owner", default=None, help="Id da conta dona da escala")
    p_exp.add_argument("--out", required=True, help="Arquivo de saída")
    p_exp.set_defaults(func=_cmd_export)

    args = p.parse_args(argv)
    level = "DEBUG" if args.verbose else "WARNING"
    setup_logging(level=level, log_file=None)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import argparse
from datetime import datetime

from core.config import get_settings
from core.db import session_scope
from core.logging_config import setup_logging
from core.store import run_expiration_sweep, run_lesson_total_fix


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Expire lapsed students and optionally reset lesson totals.")
    parser.add_argument("--fix-lessons", action="store_true", help="force lesson totals back to package defaults")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level)

    with session_scope() as s:
        expired = run_expiration_sweep(s, datetime.now(), batch_size=settings.sweep_batch_size)
        fixed = run_lesson_total_fix(s) if args.fix_lessons else []

    print(f"expired={len(expired)} lessons_fixed={len(fixed)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

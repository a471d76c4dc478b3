"""Entry point: read a snapshot JSON file, print the derived report as JSON."""

import logging
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from copilot_risk.config import Settings
from copilot_risk.models.snapshot import PortfolioSnapshot
from copilot_risk.report import build_portfolio_report

logger = structlog.get_logger()


def configure_logging(level: str) -> None:
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def load_snapshot(path: Path, settings: Settings) -> PortfolioSnapshot:
    """Validate ``path``; the file's own riskProfile wins over env defaults."""
    snapshot = PortfolioSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
    if "risk_profile" not in snapshot.model_fields_set:
        snapshot = snapshot.model_copy(update={"risk_profile": settings.risk_profile()})
    return snapshot


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    configure_logging(settings.LOG_LEVEL)

    args = sys.argv[1:] if argv is None else argv
    path_arg = args[0] if args else settings.SNAPSHOT_PATH
    if not path_arg:
        logger.error("snapshot_path_missing")
        return 2

    path = Path(path_arg)
    try:
        snapshot = load_snapshot(path, settings)
    except FileNotFoundError:
        logger.error("snapshot_not_found", path=str(path))
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("snapshot_unreadable", path=str(path), error=str(exc))
        return 1
    except ValidationError as exc:
        logger.error("snapshot_invalid", path=str(path), errors=exc.error_count())
        return 1

    report = build_portfolio_report(snapshot)
    print(report.model_dump_json(by_alias=True, exclude_none=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""typesreg - query and resolve a typings package catalog.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys
from typing import Any, Dict, List

from args import parse_args
from catalog import (
    AllPackages,
    CatalogError,
    CatalogLoadError,
    PackageNotFoundError,
    RegistrySettings,
    load_settings,
)
from catalog.loader import read_not_needed_packages, read_types_data_file
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from versioning.parser import parse_package_token

logger = logging.getLogger(__name__)


class UsageError(Exception):
    """Raised for command line combinations that cannot be served."""


def _setup_logging(args) -> None:
    """Configure logging from --loglevel and --logfile."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        logging.getLogger().addHandler(handler)


def _settings_from_args(args) -> RegistrySettings:
    return load_settings(
        getattr(args, "CONFIG", None),
        {
            "data_dir": getattr(args, "DATA_DIR", None),
            "scope_name": getattr(args, "SCOPE_NAME", None),
            "output_dir": getattr(args, "OUTPUT_DIR", None),
        },
    )


def _require_dt(args) -> str:
    dt_path = getattr(args, "DT_PATH", None)
    if not dt_path:
        raise UsageError(f"--dt is required for '{args.COMMAND}'")
    return dt_path


def _load_registry(args, settings: RegistrySettings) -> AllPackages:
    """Build the registry; stubs are included only when --dt is given."""
    dt_path = getattr(args, "DT_PATH", None)
    not_needed = read_not_needed_packages(dt_path, settings) if dt_path else []
    return AllPackages.from_data(read_types_data_file(settings), not_needed, settings)


def _summary(pkg) -> Dict[str, Any]:
    return {
        "name": pkg.name,
        "version": f"{pkg.major}.{pkg.minor}",
        "isLatest": pkg.is_latest,
        "notNeeded": pkg.is_not_needed(),
        "fullNpmName": pkg.full_npm_name,
    }


def _emit(payload: Any, text_lines: List[str], output_format: str) -> None:
    if output_format == "json":
        print(json.dumps(payload, indent=2))
    else:
        for line in text_lines:
            print(line)


def _emit_record(record: Dict[str, Any], output_format: str) -> None:
    lines = [
        f"{key}: {', '.join(map(str, value)) if isinstance(value, list) else value}"
        for key, value in record.items()
    ]
    _emit(record, lines, output_format)


def _run_list(args, settings: RegistrySettings) -> None:
    if args.NOT_NEEDED:
        packages = read_not_needed_packages(_require_dt(args), settings)
    elif args.ALL:
        _require_dt(args)
        packages = _load_registry(args, settings).all_packages()
    elif args.LATEST:
        packages = AllPackages.read_latest_typings(settings)
    else:
        packages = AllPackages.read_typings(settings)
    _emit([_summary(p) for p in packages], [p.desc for p in packages], args.OUTPUT_FORMAT)


def _run_query(args, settings: RegistrySettings) -> None:
    pkg_id = parse_package_token(args.SPEC)
    registry = _load_registry(args, settings)

    if args.COMMAND == "resolve":
        resolved = registry.try_resolve(pkg_id)
        _emit({"requested": str(pkg_id), "resolved": str(resolved)}, [str(resolved)], args.OUTPUT_FORMAT)
        return

    pkg = registry.try_get_typings_data(pkg_id)
    if pkg is None:
        stub = registry.get_not_needed_package(pkg_id.name)
        if stub is not None and args.COMMAND == "info":
            _emit_record(stub.to_dict(), args.OUTPUT_FORMAT)
            return
        raise PackageNotFoundError(f"No typings available for {pkg_id}")

    if args.COMMAND == "info":
        _emit_record(pkg.to_dict(), args.OUTPUT_FORMAT)
    else:
        deps = list(registry.all_dependency_typings(pkg))
        _emit([_summary(d) for d in deps], [d.desc for d in deps], args.OUTPUT_FORMAT)


def run(args) -> int:
    """Execute the parsed command and return its exit code."""
    try:
        settings = _settings_from_args(args)
        if is_debug_enabled(logger):
            logger.debug(
                "Running command",
                extra=extra_context(
                    event="command",
                    component="cli",
                    action=args.COMMAND,
                    data_dir=settings.data_dir
                )
            )
        if args.COMMAND == "list":
            _run_list(args, settings)
        elif args.COMMAND in ("resolve", "info", "deps"):
            _run_query(args, settings)
        elif args.COMMAND == "single":
            _emit_record(AllPackages.read_single(args.NAME, settings).to_dict(), args.OUTPUT_FORMAT)
        elif args.COMMAND == "not-needed":
            stub = AllPackages.read_single_not_needed(args.NAME, _require_dt(args), settings)
            _emit_record(stub.to_dict(), args.OUTPUT_FORMAT)
    except CatalogLoadError as exc:
        logger.error("%s", exc)
        return ExitCodes.FILE_ERROR.value
    except PackageNotFoundError as exc:
        logger.error("%s", exc)
        return ExitCodes.NOT_FOUND.value
    except (CatalogError, UsageError, ValueError) as exc:
        logger.error("%s", exc)
        return ExitCodes.MALFORMED_INPUT.value
    return ExitCodes.SUCCESS.value


def main():
    """Main function of the program."""
    args = parse_args()
    _setup_logging(args)
    sys.exit(run(args))


if __name__ == "__main__":
    main()

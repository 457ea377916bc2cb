import argparse
import logging
from pathlib import Path
from typing import Optional

import colorlog

from composable_validators import __version__
from composable_validators.validation.config import USERNAME_TAG, ValidatorConfig, load_config
from composable_validators.validation.orchestrator import Orchestrator
from composable_validators.validation.registry import UnitRegistry, build_default_registry

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_FAILURES = 2
EXIT_UNIT_ERRORS = 3


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _load_setup(args: argparse.Namespace) -> Optional[tuple[UnitRegistry, Orchestrator]]:
    """Build the registry and orchestrator from --config, or None after logging the error."""
    config_arg = getattr(args, "config", None)
    try:
        config = load_config(Path(config_arg)) if config_arg else ValidatorConfig()
        registry = build_default_registry(config)
    except (FileNotFoundError, ValueError) as e:
        logging.error("Failed to load configuration: %s", e)
        return None
    return registry, Orchestrator(registry, error_policy=config.error_policy)


def _warn_unknown_tag(registry: UnitRegistry, tag: str) -> None:
    if tag not in registry:
        logging.warning(
            "No units registered for tag '%s'; every value will pass. Known tags: %s",
            tag,
            ", ".join(registry.tags()) or "none",
        )


def _exit_code(has_failures: bool, has_unit_errors: bool) -> int:
    if has_unit_errors:
        return EXIT_UNIT_ERRORS
    if has_failures:
        return EXIT_FAILURES
    return EXIT_OK


def cmd_check(args: argparse.Namespace) -> int:
    """Validate values given on the command line.

    Returns:
        0 if every value passed
        1 if the configuration could not be loaded
        2 if any value failed validation
        3 if any unit failed to execute
    """
    setup = _load_setup(args)
    if setup is None:
        return EXIT_BAD_INPUT
    registry, orchestrator = setup
    _warn_unknown_tag(registry, args.tag)

    has_failures = False
    has_unit_errors = False
    for value in args.values:
        result = orchestrator.validate(value, args.tag)
        print(result.to_console_summary())
        print()
        has_failures = has_failures or not result.passed
        has_unit_errors = has_unit_errors or result.has_unit_errors()

    return _exit_code(has_failures, has_unit_errors)


def _report_path(target, csv_path: Path, column: str, suffix: str) -> Path:
    """Resolve --report/--report-json: True means next to the CSV, else a directory."""
    if target is True:
        report_dir = csv_path.parent
    else:
        report_dir = Path(target)
    report_dir.mkdir(parents=True, exist_ok=True)
    return report_dir / f"{csv_path.stem}_{column}_validation.{suffix}"


def cmd_check_csv(args: argparse.Namespace) -> int:
    """Validate one column of a CSV file.

    Returns:
        0 if every value passed
        1 if the CSV or configuration could not be read
        2 if any value failed validation
        3 if any unit failed to execute
    """
    from composable_validators.validation.batch import validate_csv

    setup = _load_setup(args)
    if setup is None:
        return EXIT_BAD_INPUT
    registry, orchestrator = setup
    _warn_unknown_tag(registry, args.tag)

    csv_path = Path(args.csv_path).resolve()
    try:
        report = validate_csv(csv_path, args.column, args.tag, orchestrator)
    except (FileNotFoundError, ValueError) as e:
        logging.error("%s", e)
        return EXIT_BAD_INPUT

    if report.has_failures():
        logging.warning(
            "Validation failed for %s:%s: %d failures, %d unit errors",
            csv_path.name,
            args.column,
            report.get_failure_count(),
            report.get_unit_error_count(),
        )
    else:
        logging.info("Validation passed for %s:%s", csv_path.name, args.column)

    print(report.to_console_summary())

    if args.report:
        report_path = _report_path(args.report, csv_path, args.column, "md")
        with open(report_path, "w", encoding="utf-8") as f:
            f.write(report.to_markdown())
        logging.info("Markdown report saved: %s", report_path)

    if args.report_json:
        report_path = _report_path(args.report_json, csv_path, args.column, "json")
        with open(report_path, "w", encoding="utf-8") as f:
            f.write(report.to_json())
        logging.info("JSON report saved: %s", report_path)

    return _exit_code(report.has_failures(), report.has_unit_errors())


def cmd_list_units(args: argparse.Namespace) -> int:
    """Print the execution order of registered units, per tag."""
    setup = _load_setup(args)
    if setup is None:
        return EXIT_BAD_INPUT
    registry, _ = setup

    tags = [args.tag] if args.tag else registry.tags()
    for tag in tags:
        print(f"{tag}:")
        _print_units(registry.units_for(tag), indent=2)
    return EXIT_OK


def _print_units(units, indent: int) -> None:
    pad = " " * indent
    for unit in units:
        stop = " [stop_on_error]" if unit.stop_on_error else ""
        print(f"{pad}{unit.priority:>4}  {unit.name}{stop}")
        sub_units = getattr(unit, "sub_units", None)
        if sub_units:
            _print_units(sub_units, indent + 6)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="composable-validators",
        description=f"Composable Validators (v{__version__})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )
    p.add_argument(
        "--config",
        default=None,
        help="YAML file with parameters for the built-in units (lengths, pattern, denylist, error policy)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_check = sub.add_parser("check", help="Validate one or more values")
    p_check.add_argument("values", nargs="+", help="Values to validate")
    p_check.add_argument(
        "--tag",
        default=USERNAME_TAG,
        help=f"Input-type tag selecting the units (default: {USERNAME_TAG})",
    )
    p_check.set_defaults(func=cmd_check)

    p_csv = sub.add_parser("check-csv", help="Validate one column of a CSV file")
    p_csv.add_argument("csv_path", help="Path to the CSV file")
    p_csv.add_argument("--column", required=True, help="Column holding the values to validate")
    p_csv.add_argument(
        "--tag",
        default=USERNAME_TAG,
        help=f"Input-type tag selecting the units (default: {USERNAME_TAG})",
    )
    p_csv.add_argument(
        "--report",
        nargs="?",
        const=True,
        default=False,
        help="Generate detailed Markdown report. Optionally specify custom directory path.",
    )
    p_csv.add_argument(
        "--report-json",
        nargs="?",
        const=True,
        default=False,
        help="Generate detailed JSON report. Optionally specify custom directory path.",
    )
    p_csv.set_defaults(func=cmd_check_csv)

    p_list = sub.add_parser("list-units", help="Show registered units in execution order")
    p_list.add_argument("--tag", default=None, help="Only show units for this tag")
    p_list.set_defaults(func=cmd_list_units)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())

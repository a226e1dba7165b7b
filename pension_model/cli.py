# pension_model/cli.py
# Command-line interface entry point (argparse)
import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from pension_model.config import DEFAULT_CONFIG, ConfigLoadError, ValidationLimits, load_engine_config, load_yaml_config
from pension_model.data import DEFAULT_INDEXATION_FILE, DEFAULT_LIFESPAN_FILE, get_reference_data
from pension_model.engines import generate_extra_income_scenarios, project, suggest_paths
from pension_model.reference import ReferenceDataLoadError
from pension_model.reporting import report_to_dict
from pension_model.schema import CareerRecord

# Import logging configuration
from logging_config import DEFAULT_LOG_DIR, setup_logging

# Get logger for this module
logger = logging.getLogger(__name__)

# Career flags and the CareerRecord field each one fills
_CAREER_FLAGS = {
    "age": "age",
    "sex": "sex",
    "salary": "gross_salary",
    "work_start": "work_start_year",
    "work_end": "work_end_year",
    "primary_account": "primary_account",
    "sub_account": "sub_account",
    "prior_capital": "prior_system_capital",
    "external_fund": "external_fund_account",
    "desired": "desired_monthly_pension",
}


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    today = date.today()
    parser = argparse.ArgumentParser(description="Project a retirement benefit and suggest ways to reach a goal.")

    # Career input
    parser.add_argument("--career", type=str, default=None, help="YAML file holding the career record.")
    parser.add_argument("--age", type=int)
    parser.add_argument("--sex", choices=["male", "female"])
    parser.add_argument("--salary", type=float, help="Current gross monthly salary.")
    parser.add_argument("--work-start", type=int, help="First working year.")
    parser.add_argument("--work-end", type=int, help="Planned last working year.")
    parser.add_argument("--primary-account", type=float)
    parser.add_argument("--sub-account", type=float)
    parser.add_argument("--prior-capital", type=float, help="Capital carried over from the pre-reform system.")
    parser.add_argument("--external-fund", type=float)
    parser.add_argument("--desired", type=float, help="Desired monthly pension.")
    parser.add_argument("--sick-leave", action="store_true", help="Include the average sick-leave impact.")

    # Reference date
    parser.add_argument(
        "--as-of-year", type=int, default=today.year, help=f"Reference year (default: {today.year})"
    )
    parser.add_argument(
        "--as-of-month",
        type=int,
        default=today.month - 1,
        choices=range(12),
        metavar="0-11",
        help="Zero-based reference month (default: current month)",
    )

    # Data and configuration
    parser.add_argument("--config", type=str, default=None, help="YAML configuration overlay.")
    parser.add_argument("--lifespan", type=str, default=str(DEFAULT_LIFESPAN_FILE), help="Life-expectancy table.")
    parser.add_argument("--indexation", type=str, default=str(DEFAULT_INDEXATION_FILE), help="Indexation table.")
    parser.add_argument(
        "--no-reference", action="store_true", help="Skip reference tables and the capital-based benefit."
    )

    # Output
    parser.add_argument("--top-scenarios", type=int, default=5, help="Extra-income scenarios to include.")
    parser.add_argument("--output", type=str, default=None, help="Write the JSON report here instead of stdout.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--log-dir",
        type=str,
        default=str(DEFAULT_LOG_DIR),
        help=f"Directory to store log files (default: {DEFAULT_LOG_DIR})",
    )

    return parser.parse_args(argv)


def build_career(args: argparse.Namespace, limits: ValidationLimits = DEFAULT_CONFIG.limits) -> CareerRecord:
    """Merge the career YAML (if any) with command-line flags (flags win), then check the configured limits."""
    fields: Dict[str, Any] = {}
    if args.career:
        fields.update(load_yaml_config(args.career))
    for flag, field_name in _CAREER_FLAGS.items():
        value = getattr(args, flag)
        if value is not None:
            fields[field_name] = value
    if args.sick_leave:
        fields["include_sick_leave"] = True
    return CareerRecord.model_validate(fields, context={"limits": limits})


def run(args: argparse.Namespace) -> Dict[str, Any]:
    """Run projection, scenarios and advice; return the JSON-safe report."""
    config = load_engine_config(args.config)
    career = build_career(args, config.limits)

    reference = None
    if not args.no_reference:
        reference = get_reference_data(args.lifespan, args.indexation)

    report = project(career, args.as_of_year, reference, config, args.as_of_month)

    advice = None
    if career.desired_monthly_pension is not None:
        advice = suggest_paths(
            report.nominal_monthly_pension,
            career.desired_monthly_pension,
            career.gross_salary,
            report.years_until_retirement,
            config,
            retirement_age=config.economics.statutory_retirement_age(career.sex),
        )

    scenarios = generate_extra_income_scenarios(
        report.nominal_monthly_pension, career.gross_salary, career.desired_monthly_pension, config
    )[: max(0, args.top_scenarios)]

    return report_to_dict(report, advice, scenarios, config)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the projection CLI."""
    args = parse_arguments(argv)
    setup_logging(log_dir=Path(args.log_dir), debug=args.debug)
    logger.info(f"Starting projection run with arguments: {vars(args)}")

    try:
        result = run(args)
    except ConfigLoadError as e:
        logger.error(f"Invalid configuration: {e}")
    except ValidationError as e:
        logger.error(f"Invalid career record: {e}")
    except ReferenceDataLoadError as e:
        logger.error(f"Cannot compute: {e}")
    else:
        text = json.dumps(result, indent=2, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(text + "\n", encoding="utf-8")
            logger.info(f"Report written to {args.output}")
        else:
            print(text)
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())

"""
Expression Evolver - Main Entry Point

This module configures Logfire observability, builds the run configuration
from the environment and prints the winning expression of one evolution run.
"""

import sys
import logging
from typing import Optional, List

from dotenv import load_dotenv
import logfire

from src.core.config import settings
from src.evolver import (
    ConfigurationError,
    EvolverConfig,
    WinnerReport,
    create_default_config,
    run
)

# Load environment variables
load_dotenv()

# Configure Logfire for observability
logfire.configure(**settings.get_logfire_settings())

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def load_config() -> EvolverConfig:
    """Demonstration parameters, overridden by EVOLVER_* environment variables."""
    return EvolverConfig.from_env(base=create_default_config())


def format_report(report: WinnerReport) -> List[str]:
    """Lines describing the winner, in display order."""
    result = report.result if report.result is not None else "no value"
    return [
        "The winner is...",
        f"Phenotype: {report.phenotype}",
        f"Clean phenotype: {report.clean_phenotype}",
        f"Result: {result}",
        f"Fitness: {report.fitness}",
    ]


def main(config: Optional[EvolverConfig] = None) -> int:
    """
    Run one evolution and print the winner.

    Returns:
        Process exit status
    """
    try:
        if config is None:
            config = load_config()
    except ConfigurationError as e:
        logfire.error("Invalid configuration", error=str(e))
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    with logfire.span("Evolver run", environment=settings.environment):
        report = run(config)

    print()
    for line in format_report(report):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Main entry point for the CCRM platform.
"""

import argparse
import logging
from typing import List, Optional

from .api.rest_api import CCRMRestAPI
from .config import AppConfig
from .core.entities import Course, CourseSpec
from .core.enums import Semester
from .core.exceptions import ConfigurationError
from .services import (
    CourseCatalog, CreditLimitPolicy, EnrollmentLedger, ReportingEngine, StudentRegistry
)

logger = logging.getLogger("ccrm.platform")

SAMPLE_COURSES = [
    CourseSpec(code="CS101", title="Introduction to Programming", credits=3,
               instructor="Dr. Smith", semester=Semester.FALL, department="Computer Science"),
    CourseSpec(code="MATH201", title="Calculus I", credits=4,
               instructor="Prof. Johnson", semester=Semester.FALL, department="Mathematics"),
    CourseSpec(code="PHY101", title="Physics Fundamentals", credits=3,
               instructor="Dr. Brown", semester=Semester.SPRING, department="Physics"),
]


class CCRMPlatform:
    """Main platform class that wires the registries, reports, and API."""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig()

        self.students = StudentRegistry()
        self.courses = CourseCatalog()
        self.ledger = EnrollmentLedger(self.students, self.courses)
        if self._config.max_credits_per_semester is not None:
            self.ledger.add_policy(
                CreditLimitPolicy(self._config.max_credits_per_semester, self.courses)
            )
        self.reports = ReportingEngine(self.students, self.courses, self.ledger)
        self.rest_api = CCRMRestAPI(self.students, self.courses, self.ledger, self.reports)
        logger.info("CCRM platform initialized (data path %s)", self._config.data_path)

        if self._config.seed_sample_data:
            self.seed_sample_data()

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def app(self):
        return self.rest_api.app

    def seed_sample_data(self) -> List[Course]:
        """Add the sample courses that are not in the catalog yet."""
        added = []
        for spec in SAMPLE_COURSES:
            if spec.code in self.courses:
                continue
            added.append(self.courses.add_from_spec(spec))
        logger.info("Seeded %d sample courses", len(added))
        return added

    def serve(self) -> None:
        """Serve the REST API until interrupted."""
        import uvicorn

        uvicorn.run(
            self.app,
            host=self._config.host,
            port=self._config.port,
            log_level=self._config.log_level.lower(),
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Campus Course Records Manager")
    parser.add_argument("--config", type=str, help="Configuration file path (JSON)")
    parser.add_argument("--host", type=str, help="REST server host")
    parser.add_argument("--port", type=int, help="REST server port")
    parser.add_argument("--no-seed", action="store_true", help="Start with an empty course catalog")
    parser.add_argument("--log-level", type=str, help="Logging level")
    return parser


def load_config(args: argparse.Namespace) -> AppConfig:
    """Config file if given, else the environment; flags override either."""
    config = AppConfig.from_file(args.config) if args.config else AppConfig.from_env()
    return config.merged(
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        seed_sample_data=False if args.no_seed else None,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args)
    except ConfigurationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error("Invalid configuration: %s", e.message)
        return 2

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    platform = CCRMPlatform(config)
    try:
        platform.serve()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

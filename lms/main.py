"""
Main entry point for the LMS.
"""

import argparse
import logging
import sys
from typing import Optional

from .core.config import LMSConfig, load_config
from .core.entities import Course, Identity
from .core.enums import Role
from .core.exceptions import LMSException
from .services import LMSContext, CourseRegistry, UserDirectory
from .api.rest_api import LMSRestAPI
from .cli import LMSConsole

logger = logging.getLogger(__name__)


SAMPLE_COURSES = [
    ("Mathematics", "teacher1@example.com", ["Introduction to Algebra", "Advanced Calculus"]),
    ("Physics", "teacher2@example.com", ["Newton's Laws", "Thermodynamics"]),
]

SAMPLE_USERS = [
    ("admin1", "admin1@example.com", "adminpass", Role.ADMINISTRATOR),
    ("teacher1", "teacher1@example.com", "teacherpass", Role.TEACHER),
    ("teacher2", "teacher2@example.com", "teacherpass", Role.TEACHER),
]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class LMSPlatform:
    """Main platform class that owns the context and starts a surface."""

    def __init__(self, config: Optional[LMSConfig] = None):
        self._config = config or LMSConfig()
        self._context: Optional[LMSContext] = None
        self._rest_api: Optional[LMSRestAPI] = None

        self._initialize_platform()

    @property
    def config(self) -> LMSConfig:
        return self._config

    @property
    def context(self) -> LMSContext:
        return self._context

    def _initialize_platform(self):
        """Build the registry, the directory and the seed data.

        Bootstrap errors are fatal and propagate to the caller.
        """
        logger.info("Initializing LMS platform")
        self._context = LMSContext(registry=CourseRegistry(), directory=UserDirectory(), config=self._config)
        if self._config.seed_sample_data:
            self.create_sample_data()
        logger.info("LMS platform initialized with %d courses and %d users",
                    len(self._context.registry), len(self._context.directory))

    def create_sample_data(self):
        """Create the sample courses and accounts."""
        for name, teacher_email, contents in SAMPLE_COURSES:
            course = Course(name, teacher_email)
            for content in contents:
                course.add_content(content)
            self._context.registry.add_course(course)

        for username, email, password, role in SAMPLE_USERS:
            self._context.directory.add(Identity(username, email, password, role))
        logger.info("Sample data created")

    @property
    def rest_api(self) -> LMSRestAPI:
        if self._rest_api is None:
            self._rest_api = LMSRestAPI(self._context)
        return self._rest_api

    def run_console(self, input_func=input, output=print) -> int:
        """Run the interactive console."""
        return LMSConsole(self._context, input_func=input_func, output=output).run()

    def start_rest_server(self, host: str = "127.0.0.1", port: int = 8000):
        """Start the REST server; blocks until it stops."""
        import uvicorn

        print(f"✓ REST server starting on {host}:{port}")
        print(f"  - API Docs: http://{host}:{port}/docs")
        uvicorn.run(
            self.rest_api.app,
            host=host,
            port=port,
            log_level=self._config.log_level.lower()
        )


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Learning Management System")
    parser.add_argument("--config", type=str, help="Configuration file path (JSON)")
    parser.add_argument("--serve", action="store_true", help="Serve the REST API instead of the console")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="REST server host")
    parser.add_argument("--port", type=int, default=8000, help="REST server port")
    parser.add_argument("--log-level", type=str, help="Override the configured log level")

    args = parser.parse_args(argv)

    overrides = {'log_level': args.log_level.upper()} if args.log_level else None
    try:
        config = load_config(args.config, overrides)
        configure_logging(config.log_level)
        platform = LMSPlatform(config)
    except LMSException as e:
        print(f"Fatal error: {e.message}", file=sys.stderr)
        return 1

    try:
        if args.serve:
            platform.start_rest_server(args.host, args.port)
            return 0
        return platform.run_console()
    except KeyboardInterrupt:
        print("\nShutting down...")
        return 0


if __name__ == "__main__":
    sys.exit(main())

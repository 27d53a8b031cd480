"""Runtime environment types.

Used by RobinhoodSettings and configure_logging to pick log rendering.

Environments:
- DEVELOPMENT: Local development, human-readable colored logs
- TESTING: Automated test execution, JSON logs
- CI: Continuous integration, JSON logs
- PRODUCTION: Embedded in the aggregation platform, JSON logs
"""

from enum import Enum


class Environment(str, Enum):
    """Runtime environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"

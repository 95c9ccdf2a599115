"""Runtime environment of the embedding application.

Only the log renderer depends on it: development and production render
for humans, testing and ci render JSON lines.
"""

from enum import Enum


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"

    @property
    def uses_json_logs(self) -> bool:
        return self in (Environment.TESTING, Environment.CI)

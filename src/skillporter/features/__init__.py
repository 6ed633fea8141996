# ABOUTME: Optional git/GitHub workflows built on top of conversion
# ABOUTME: Both talk to external tools only through a CommandRunner

from skillporter.features.fork import ForkResult, ForkSetup
from skillporter.features.pr import BRANCH_NAME, PRGenerator, PRResult

__all__ = [
    "BRANCH_NAME",
    "ForkResult",
    "ForkSetup",
    "PRGenerator",
    "PRResult",
]

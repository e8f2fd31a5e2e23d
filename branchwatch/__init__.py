"""Branchwatch: has a branch moved since its last successful build?

Clones a repository anonymously, resolves a branch, tag or commit id to a
commit and compares it with the commits the latest successful build of a
build configuration was made from.  Build orchestration uses the answer to
skip rebuilds of unchanged sources.
"""

__version__ = "0.1.0"
__description__ = (
    "Detect whether a branch moved since the last successful build of a build configuration"
)

from branchwatch.core.modification_checker import ModificationChecker
from branchwatch.models.builds import BuildKind, BuildRecord
from branchwatch.models.checks import CheckOutcome, CheckState

__all__ = [
    "ModificationChecker",
    "BuildKind",
    "BuildRecord",
    "CheckOutcome",
    "CheckState",
    "__version__",
]

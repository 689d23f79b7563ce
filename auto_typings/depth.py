"""Two-axis recursion budget for dependency expansion."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from auto_typings.options import Options


@dataclass(frozen=True)
class RecursionBudget:
    """Remaining expansion depth along the file and package axes.

    Budgets only flow downward: every step derives a new value and the
    original is left untouched, so siblings in the same file keep theirs.

    Attributes:
        file_depth: Same-package relative imports still allowed.
        package_depth: Package boundaries still allowed to be crossed.
        initial_file_depth: File depth restored when entering a new package.
    """

    file_depth: int
    package_depth: int
    initial_file_depth: int

    @classmethod
    def from_options(cls, options: Options) -> RecursionBudget:
        """Fresh budget for one resolution pass."""
        return cls(
            file_depth=options.file_recursion_depth,
            package_depth=options.package_recursion_depth,
            initial_file_depth=options.file_recursion_depth,
        )

    @property
    def file_exhausted(self) -> bool:
        return self.file_depth <= 0

    @property
    def package_exhausted(self) -> bool:
        return self.package_depth <= 0

    def step_file(self) -> RecursionBudget:
        """Budget for a relative import within the same package."""
        return replace(self, file_depth=self.file_depth - 1)

    def cross_package(self) -> RecursionBudget:
        """Budget for entering a different package."""
        return replace(
            self,
            package_depth=self.package_depth - 1,
            file_depth=self.initial_file_depth,
        )

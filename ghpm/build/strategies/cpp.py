"""C/C++ projects built with make or CMake."""

from collections.abc import Iterator
from pathlib import Path

from ghpm.build.strategies.base import BaseStrategy, is_executable_file, iter_files
from ghpm.build.types import BuildAttempt, BuildOutcome, BuildStep, EcosystemTag, WorkingDir

MAKEFILES = ("Makefile", "makefile", "GNUmakefile")
CMAKE_LISTS = "CMakeLists.txt"
NO_BUILD_SYSTEM = "no build system found"
OUTPUT_DIRS = (".", "bin", "build")


class CppStrategy(BaseStrategy):
    """Prefers a Makefile build; falls back to an out-of-tree CMake build.

    ``make install`` is attempted after a successful ``make`` but its
    failure only produces a warning, since install targets are often
    missing or need root. Both CMake steps are hard requirements.
    """

    tag = EcosystemTag.CCPP
    description = "C/C++ project (Makefile, CMakeLists.txt)"
    marker_files = (*MAKEFILES, CMAKE_LISTS)

    def has_makefile(self, repo_root: Path) -> bool:
        return any((repo_root / name).is_file() for name in MAKEFILES)

    def has_cmake(self, repo_root: Path) -> bool:
        return (repo_root / CMAKE_LISTS).is_file()

    def precheck(self, repo_root: Path) -> BuildOutcome | None:
        if not self.has_makefile(repo_root) and not self.has_cmake(repo_root):
            return BuildOutcome.failure(NO_BUILD_SYSTEM, halted=True)
        return None

    def build_attempts(self, repo_root: Path) -> list[BuildAttempt]:
        attempts: list[BuildAttempt] = []

        if self.has_makefile(repo_root):
            attempts.append(
                BuildAttempt(
                    tool_required="make",
                    command=("make",),
                    description="make && make install",
                    follow_ups=(BuildStep(("make", "install"), optional=True),),
                    alternative=True,
                )
            )

        if self.has_cmake(repo_root):
            attempts.append(
                BuildAttempt(
                    tool_required="cmake",
                    command=("cmake", ".."),
                    description="cmake && make",
                    working_dir=WorkingDir.BUILD_SUBDIR,
                    follow_ups=(BuildStep(("make",), WorkingDir.BUILD_SUBDIR),),
                    extra_tools=("make",),
                    alternative=True,
                )
            )

        return attempts

    def find_binaries(self, repo_root: Path, repo_name: str) -> Iterator[Path]:
        directories = [repo_root / d for d in OUTPUT_DIRS]

        found = False
        for directory in directories:
            candidate = directory / repo_name
            if is_executable_file(candidate):
                found = True
                yield candidate

        if found:
            return

        for path in iter_files(directories):
            if is_executable_file(path):
                yield path

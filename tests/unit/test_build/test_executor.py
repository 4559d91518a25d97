"""Tests for BuildExecutor."""

import os
from pathlib import Path

from ghpm.build.executor import BuildExecutor
from ghpm.build.types import BuildAttempt, EcosystemTag, WorkingDir


def make_executor(runner, tool_set) -> BuildExecutor:
    return BuildExecutor(runner=runner, tool_exists=tool_set)


class TestShortCircuits:
    """Outcomes decided before any command runs."""

    def test_no_build_skips_everything(self, repo_dir: Path, runner, tools) -> None:
        """Test --no-build returns a skipped outcome without consulting tools."""
        tool_set = tools(["go"])
        outcome = make_executor(runner, tool_set).build(repo_dir, EcosystemTag.GO, no_build=True)

        assert outcome.succeeded is False
        assert outcome.skipped is True
        assert outcome.halted is False
        assert outcome.reason == "skipped"
        assert runner.calls == []
        assert tool_set.queries == []

    def test_unknown_language(self, repo_dir: Path, runner, tools) -> None:
        """Test Unknown short-circuits without invoking any tool."""
        tool_set = tools(["go", "make"])
        outcome = make_executor(runner, tool_set).build(repo_dir, EcosystemTag.UNKNOWN)

        assert outcome.succeeded is False
        assert outcome.reason == "unknown language"
        assert outcome.halted is True
        assert runner.calls == []
        assert tool_set.queries == []

    def test_missing_tool_spawns_nothing(self, repo_dir: Path, runner, tools) -> None:
        """Test a missing required tool aborts with its name."""
        (repo_dir / "go.mod").write_text("module tool\n")
        outcome = make_executor(runner, tools()).build(repo_dir, EcosystemTag.GO)

        assert outcome.succeeded is False
        assert outcome.reason == "missing go"
        assert outcome.halted is True
        assert runner.calls == []

    def test_ruby_needs_no_build(self, repo_dir: Path, runner, tools) -> None:
        """Test Ruby is recorded as not built without being a failure."""
        (repo_dir / "Gemfile").write_text("")
        outcome = make_executor(runner, tools(["ruby", "bundle"])).build(
            repo_dir, EcosystemTag.RUBY
        )

        assert outcome.succeeded is False
        assert outcome.reason == "no build required"
        assert outcome.halted is False
        assert runner.calls == []


class TestFallbackChain:
    """Ordered attempts with fallback on failure."""

    def test_first_attempt_success(self, repo_dir: Path, runner, tools) -> None:
        """Test the first attempt's description is recorded on success."""
        outcome = make_executor(runner, tools(["go"])).build(repo_dir, EcosystemTag.GO)

        assert outcome.succeeded is True
        assert outcome.attempt_description == "go install"
        assert runner.commands == [("go", "install")]
        assert runner.calls[0][1] == repo_dir

    def test_fallback_success_records_second_attempt(self, repo_dir: Path, runner, tools) -> None:
        """Test a failed first attempt is not surfaced once the second succeeds."""
        runner.fail(("go", "install"))
        outcome = make_executor(runner, tools(["go"])).build(repo_dir, EcosystemTag.GO)

        assert outcome.succeeded is True
        assert outcome.attempt_description == "go build"
        assert outcome.reason == ""
        assert runner.commands == [("go", "install"), ("go", "build")]

    def test_all_attempts_fail(self, repo_dir: Path, runner, tools) -> None:
        """Test the last attempt's failure becomes the outcome."""
        runner.fail(("cargo", "install", "--path", "."), ("cargo", "build", "--release"))
        outcome = make_executor(runner, tools(["cargo"])).build(repo_dir, EcosystemTag.RUST)

        assert outcome.succeeded is False
        assert outcome.halted is False
        assert outcome.attempt_description == "cargo build --release"
        assert outcome.reason == "cargo build --release failed"

    def test_tool_queried_once_per_attempt(self, repo_dir: Path, runner, tools) -> None:
        """Test each attempt checks its tool exactly once."""
        runner.fail(("go", "install"))
        tool_set = tools(["go"])
        make_executor(runner, tool_set).build(repo_dir, EcosystemTag.GO)

        assert tool_set.queries == ["go", "go"]

    def test_python_fallback_needs_secondary_tool(self, repo_dir: Path, runner, tools) -> None:
        """Test the legacy installer is not run when python3 is absent."""
        runner.fail(("pip", "install", "."))
        outcome = make_executor(runner, tools(["pip"])).build(repo_dir, EcosystemTag.PYTHON)

        assert outcome.succeeded is False
        assert outcome.reason == "missing python3"
        assert runner.commands == [("pip", "install", ".")]

    def test_python_legacy_installer(self, repo_dir: Path, runner, tools) -> None:
        """Test pip failure falls back to setup.py install."""
        runner.fail(("pip", "install", "."))
        outcome = make_executor(runner, tools(["pip", "python3"])).build(
            repo_dir, EcosystemTag.PYTHON
        )

        assert outcome.succeeded is True
        assert outcome.attempt_description == "python3 setup.py install"

    def test_node_single_attempt(self, repo_dir: Path, runner, tools) -> None:
        """Test npm install is the only Node attempt."""
        runner.fail(("npm", "install"))
        outcome = make_executor(runner, tools(["npm"])).build(repo_dir, EcosystemTag.NODEJS)

        assert outcome.succeeded is False
        assert outcome.reason == "npm install failed"
        assert runner.commands == [("npm", "install")]

    def test_run_attempts_empty(self, repo_dir: Path, runner, tools) -> None:
        """Test an empty attempt list halts."""
        outcome = make_executor(runner, tools()).run_attempts(repo_dir, [])
        assert outcome.succeeded is False
        assert outcome.halted is True

    def test_spawn_error_is_attempt_failure(self, repo_dir: Path, tools) -> None:
        """Test an attempt whose process cannot start counts as failed."""
        from ghpm.build.runner import SubprocessRunner

        attempt = BuildAttempt(
            tool_required="anything",
            command=("ghpm-test-command-that-does-not-exist",),
            description="broken",
        )
        executor = BuildExecutor(runner=SubprocessRunner(), tool_exists=tools(["anything"]))
        outcome = executor.run_attempts(repo_dir, [attempt])

        assert outcome.succeeded is False
        assert outcome.reason == "broken failed"


class TestShellBuild:
    """Install-script repositories."""

    def test_no_install_script(self, repo_dir: Path, runner, tools) -> None:
        """Test a missing install script fails without running anything."""
        outcome = make_executor(runner, tools(["sh"])).build(repo_dir, EcosystemTag.SHELL)

        assert outcome.succeeded is False
        assert outcome.reason == "no install script found"
        assert runner.calls == []

    def test_runs_script_through_shell(self, repo_dir: Path, runner, tools) -> None:
        """Test the script is made executable and run via sh."""
        script = repo_dir / "install.sh"
        script.write_text("#!/bin/sh\n")
        script.chmod(0o644)

        outcome = make_executor(runner, tools(["sh"])).build(repo_dir, EcosystemTag.SHELL)

        assert outcome.succeeded is True
        assert outcome.attempt_description == "./install.sh"
        assert runner.calls == [(("sh", str(script)), repo_dir)]
        assert os.access(script, os.X_OK)

    def test_script_failure(self, repo_dir: Path, runner, tools) -> None:
        """Test a failing install script is recorded."""
        script = repo_dir / "install.sh"
        script.write_text("#!/bin/sh\nexit 1\n")
        runner.fail(("sh", str(script)))

        outcome = make_executor(runner, tools(["sh"])).build(repo_dir, EcosystemTag.SHELL)

        assert outcome.succeeded is False
        assert outcome.reason == "./install.sh failed"


class TestCppBuild:
    """Makefile and CMake builds."""

    def test_make_then_optional_install(self, repo_dir: Path, runner, tools) -> None:
        """Test make install failure does not fail the build."""
        (repo_dir / "Makefile").write_text("all:\n")
        runner.fail(("make", "install"))

        outcome = make_executor(runner, tools(["make"])).build(repo_dir, EcosystemTag.CCPP)

        assert outcome.succeeded is True
        assert outcome.attempt_description == "make && make install"
        assert runner.commands == [("make",), ("make", "install")]

    def test_make_failure_is_final(self, repo_dir: Path, runner, tools) -> None:
        """Test a failing make does not fall through to CMake."""
        (repo_dir / "Makefile").write_text("all:\n")
        (repo_dir / "CMakeLists.txt").write_text("")
        runner.fail(("make",))

        outcome = make_executor(runner, tools(["make", "cmake"])).build(
            repo_dir, EcosystemTag.CCPP
        )

        assert outcome.succeeded is False
        assert outcome.reason == "make && make install failed"
        assert ("cmake", "..") not in runner.commands

    def test_makefile_preferred_over_cmake(self, repo_dir: Path, runner, tools) -> None:
        """Test the Makefile path is chosen exclusively when make exists."""
        (repo_dir / "Makefile").write_text("all:\n")
        (repo_dir / "CMakeLists.txt").write_text("")

        outcome = make_executor(runner, tools(["make", "cmake"])).build(
            repo_dir, EcosystemTag.CCPP
        )

        assert outcome.attempt_description == "make && make install"
        assert all(command[0] == "make" for command in runner.commands)
        assert not (repo_dir / "build").exists()

    def test_cmake_out_of_tree(self, repo_dir: Path, runner, tools) -> None:
        """Test a CMake-only repository configures and builds in build/."""
        (repo_dir / "CMakeLists.txt").write_text("")

        outcome = make_executor(runner, tools(["cmake", "make"])).build(
            repo_dir, EcosystemTag.CCPP
        )

        build_dir = repo_dir / "build"
        assert outcome.succeeded is True
        assert outcome.attempt_description == "cmake && make"
        assert runner.calls == [(("cmake", ".."), build_dir), (("make",), build_dir)]
        assert build_dir.is_dir()

    def test_cmake_needs_make(self, repo_dir: Path, runner, tools) -> None:
        """Test cmake alone is not enough since the build step runs make."""
        (repo_dir / "CMakeLists.txt").write_text("")

        outcome = make_executor(runner, tools(["cmake"])).build(repo_dir, EcosystemTag.CCPP)

        assert outcome.succeeded is False
        assert outcome.reason == "missing make"
        assert outcome.attempt_description == "cmake && make"
        assert outcome.halted is True
        assert runner.calls == []
        assert not (repo_dir / "build").exists()

    def test_both_build_files_without_make(self, repo_dir: Path, runner, tools) -> None:
        """Test a missing make is reported even when CMake is available."""
        (repo_dir / "Makefile").write_text("all:\n")
        (repo_dir / "CMakeLists.txt").write_text("")

        outcome = make_executor(runner, tools(["cmake"])).build(repo_dir, EcosystemTag.CCPP)

        assert outcome.reason == "missing make"
        assert outcome.halted is True
        assert runner.calls == []

    def test_cmake_build_step_is_hard(self, repo_dir: Path, runner, tools) -> None:
        """Test a failing make after cmake fails the build."""
        (repo_dir / "CMakeLists.txt").write_text("")
        runner.fail(("make",))

        outcome = make_executor(runner, tools(["cmake", "make"])).build(
            repo_dir, EcosystemTag.CCPP
        )

        assert outcome.succeeded is False
        assert outcome.reason == "cmake && make failed"

    def test_cmake_configure_failure_stops(self, repo_dir: Path, runner, tools) -> None:
        """Test make is not run when cmake fails."""
        (repo_dir / "CMakeLists.txt").write_text("")
        runner.fail(("cmake", ".."))

        outcome = make_executor(runner, tools(["cmake", "make"])).build(
            repo_dir, EcosystemTag.CCPP
        )

        assert outcome.succeeded is False
        assert runner.commands == [("cmake", "..")]

    def test_makefile_without_make(self, repo_dir: Path, runner, tools) -> None:
        """Test a Makefile-only repository without make reports the tool."""
        (repo_dir / "Makefile").write_text("all:\n")

        outcome = make_executor(runner, tools(["cmake"])).build(repo_dir, EcosystemTag.CCPP)

        assert outcome.reason == "missing make"
        assert runner.calls == []

    def test_no_build_system(self, repo_dir: Path, runner, tools) -> None:
        """Test a C/C++ tag without build files."""
        outcome = make_executor(runner, tools(["make", "cmake"])).build(
            repo_dir, EcosystemTag.CCPP
        )

        assert outcome.reason == "no build system found"
        assert outcome.halted is True
        assert runner.calls == []


class TestWorkingDir:
    """Tests for WorkingDir resolution."""

    def test_resolve(self, repo_dir: Path) -> None:
        """Test build subdirectory resolution."""
        assert WorkingDir.REPO_ROOT.resolve(repo_dir) == repo_dir
        assert WorkingDir.BUILD_SUBDIR.resolve(repo_dir) == repo_dir / "build"

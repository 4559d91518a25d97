"""
Build engine - ecosystem detection, build execution and binary linking.

Given a cloned repository this package classifies its ecosystem, runs the
matching build commands with fallback, finds the resulting executables
and symlinks them into the user's bin directory.
"""

from ghpm.build.detector import LanguageDetector, detect_language
from ghpm.build.executor import BuildExecutor, build_repository
from ghpm.build.linker import BinaryLinker, is_on_path
from ghpm.build.pipeline import BuildPipeline, run_pipeline
from ghpm.build.resolver import BinaryResolver, resolve_binaries
from ghpm.build.runner import CommandResult, CommandRunner, SubprocessRunner
from ghpm.build.tools import ToolAvailability, tool_exists
from ghpm.build.types import (
    BinaryCandidate,
    BuildAttempt,
    BuildOutcome,
    BuildStep,
    EcosystemTag,
    LinkRecord,
    PipelineResult,
    PipelineStage,
    WorkingDir,
)

__all__ = [
    # Types
    "BinaryCandidate",
    "BuildAttempt",
    "BuildOutcome",
    "BuildStep",
    "EcosystemTag",
    "LinkRecord",
    "PipelineResult",
    "PipelineStage",
    "WorkingDir",
    # Stages
    "LanguageDetector",
    "detect_language",
    "ToolAvailability",
    "tool_exists",
    "BuildExecutor",
    "build_repository",
    "BinaryResolver",
    "resolve_binaries",
    "BinaryLinker",
    "is_on_path",
    "BuildPipeline",
    "run_pipeline",
    # Process execution
    "CommandResult",
    "CommandRunner",
    "SubprocessRunner",
]

"""Per-ecosystem build strategies."""

from ghpm.build.strategies.base import (
    BaseStrategy,
    has_execute_bit,
    is_executable_file,
    make_executable,
)
from ghpm.build.strategies.cpp import CppStrategy
from ghpm.build.strategies.go import GoStrategy, go_bin_dir
from ghpm.build.strategies.node import NodeStrategy
from ghpm.build.strategies.python import PythonStrategy
from ghpm.build.strategies.registry import (
    StrategyRegistry,
    create_default_registry,
    strategy_registry,
)
from ghpm.build.strategies.ruby import RubyStrategy
from ghpm.build.strategies.rust import RustStrategy
from ghpm.build.strategies.shell import ShellStrategy

__all__ = [
    "BaseStrategy",
    "StrategyRegistry",
    "create_default_registry",
    "strategy_registry",
    "GoStrategy",
    "RustStrategy",
    "NodeStrategy",
    "PythonStrategy",
    "RubyStrategy",
    "CppStrategy",
    "ShellStrategy",
    "go_bin_dir",
    "has_execute_bit",
    "is_executable_file",
    "make_executable",
]

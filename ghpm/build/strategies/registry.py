"""Registry of ecosystem strategies keyed by EcosystemTag."""

from collections.abc import Iterator
from pathlib import Path

from ghpm.build.strategies.base import BaseStrategy
from ghpm.build.strategies.cpp import CppStrategy
from ghpm.build.strategies.go import GoStrategy
from ghpm.build.strategies.node import NodeStrategy
from ghpm.build.strategies.python import PythonStrategy
from ghpm.build.strategies.ruby import RubyStrategy
from ghpm.build.strategies.rust import RustStrategy
from ghpm.build.strategies.shell import ShellStrategy
from ghpm.build.types import EcosystemTag


class StrategyRegistry:
    """
    Registry for managing ecosystem strategies.

    Registration order is detection priority: the first strategy whose
    markers match a repository decides its ecosystem.
    """

    def __init__(self) -> None:
        self._strategies: dict[EcosystemTag, BaseStrategy] = {}

    def register(self, strategy: BaseStrategy) -> None:
        """Register a strategy, keeping its original position if replaced."""
        if strategy.tag is EcosystemTag.UNKNOWN:
            raise ValueError("Cannot register a strategy for the Unknown ecosystem")
        self._strategies[strategy.tag] = strategy

    def get(self, tag: EcosystemTag) -> BaseStrategy | None:
        """Get the strategy for an ecosystem."""
        return self._strategies.get(tag)

    def match(self, repo_root: Path) -> BaseStrategy | None:
        """Return the highest-priority strategy that applies."""
        for strategy in self:
            if strategy.detect_applies(repo_root):
                return strategy
        return None

    @property
    def tags(self) -> list[EcosystemTag]:
        return list(self._strategies)

    def __iter__(self) -> Iterator[BaseStrategy]:
        return iter(list(self._strategies.values()))

    def __len__(self) -> int:
        return len(self._strategies)


def create_default_registry() -> StrategyRegistry:
    """Build a registry with every supported ecosystem in priority order.

    Manifest files are unambiguous, so they are checked before the shell
    install-script heuristic.
    """
    registry = StrategyRegistry()
    for strategy in (
        GoStrategy(),
        RustStrategy(),
        NodeStrategy(),
        PythonStrategy(),
        RubyStrategy(),
        CppStrategy(),
        ShellStrategy(),
    ):
        registry.register(strategy)
    return registry


strategy_registry = create_default_registry()

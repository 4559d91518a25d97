"""Interactive prompts for CLI using questionary."""

import questionary
from questionary import Style

from ghpm.models.repository import RepoSearchItem

# Custom style for questionary prompts
CUSTOM_STYLE = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("answer", "fg:green bold"),
        ("pointer", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("selected", "fg:green"),
        ("separator", "fg:gray"),
        ("instruction", "fg:gray"),
        ("text", ""),
    ]
)

CANCEL = -1


def repository_choice_title(index: int, item: RepoSearchItem) -> str:
    """Format one search result as ``1) owner/repo  ★42  Go``."""
    return f"{index}) {item.full_name}  ★{item.stargazers_count}  {item.language_label}"


def select_repository(items: list[RepoSearchItem]) -> RepoSearchItem | None:
    """Ask the user to pick one search result to install.

    Args:
        items: Search results in display order.

    Returns:
        The chosen item, or None if the user cancelled.
    """
    choices = [
        questionary.Choice(repository_choice_title(index, item), value=index - 1)
        for index, item in enumerate(items, start=1)
    ]
    choices.append(questionary.Choice("Cancel", value=CANCEL))

    selected = questionary.select(
        "Select a repository to install:",
        choices=choices,
        style=CUSTOM_STYLE,
    ).ask()

    if selected is None or selected == CANCEL:
        return None
    return items[selected]

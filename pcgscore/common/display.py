from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

LILAC = "#C8A2C8"
GOLD = "#FFD700"


_neobrutalist_theme = Theme(
    {
        "primary": LILAC,
        "accent": GOLD,
        "bold": "bold",
        "success": "green bold",
        "error": "red bold",
        "warning": "yellow bold",
        "info": "blue bold",
    }
)


_console: Console | None = None


def get_console(force_terminal: bool | None = None) -> Console:
    global _console

    if _console is None or force_terminal is not None:
        _console = Console(
            theme=_neobrutalist_theme,
            force_terminal=force_terminal,
            legacy_windows=False,
        )

    return _console


def print_banner() -> None:
    console = get_console()

    banner_text = Text()
    banner_text.append("pcgscore", style=f"bold {LILAC}")
    banner_text.append("  competition scoring", style="dim")

    panel = Panel(
        banner_text,
        border_style=GOLD,
        padding=(0, 1),
    )

    console.print(panel)


def success_badge() -> Text:
    return Text("[SUCCESS]", style="success")


def failed_badge() -> Text:
    return Text("[FAILED]", style="error")


def create_ranking_table(rankings: list[dict[str, int | str]]) -> Table:
    """Build the final leaderboard table.

    Args:
        rankings: Rows with `rank`, `team`, `prompt_score` and
            `normalized_prompt_score` keys; scores are pre-rendered strings.
    """
    table = Table(
        title="Prompt Ranking",
        title_style=f"bold {LILAC}",
        border_style=GOLD,
        header_style=f"bold {LILAC}",
        row_styles=["", "dim"],
        padding=(0, 1),
    )

    table.add_column("Rank", style="bold", justify="right")
    table.add_column("Team", style="bold")
    table.add_column("Prompt Score", justify="right")
    table.add_column("Normalized (%)", justify="right")

    if not rankings:
        table.add_row("-", "-", "-", "-")
        return table

    for entry in rankings:
        table.add_row(
            str(entry.get("rank", "-")),
            str(entry.get("team", "-")),
            str(entry.get("prompt_score", "-")),
            str(entry.get("normalized_prompt_score", "-")),
        )

    return table


def create_weights_table(weights: list[dict[str, str]]) -> Table:
    table = Table(
        title="Character Weights",
        title_style=f"bold {LILAC}",
        border_style=GOLD,
        header_style=f"bold {LILAC}",
        padding=(0, 1),
    )

    columns = ["character", "weight", "weightStability", "weightSimilarity"]
    if weights and "weightDiversity" in weights[0]:
        columns.append("weightDiversity")

    for column in columns:
        table.add_column(column, justify="left" if column == "character" else "right")

    for entry in weights:
        table.add_row(*(entry.get(column, "-") for column in columns))

    return table

"""Scoring command-line entry point.

Scores a competition source folder and writes the weight summary, trial,
character and ranking tables to its result folder.

Dependencies:
    - pcgscore.common.yaml_config: Scoring configuration loading
    - pcgscore.scoring.pipeline: The scoring run
    - pcgscore.scoring.report: Result export
    - pcgscore.common.display: Console output and formatting
"""

import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from pcgscore.common.config import ConfigError, ScoringConfig, Settings
from pcgscore.common.display import (
    create_ranking_table,
    create_weights_table,
    failed_badge,
    get_console,
    print_banner,
    success_badge,
)
from pcgscore.common.logging import RunContext
from pcgscore.common.observability import init_logfire
from pcgscore.common.yaml_config import load_scoring_config
from pcgscore.scoring.decimal_math import render
from pcgscore.scoring.errors import InconsistentTeamDataError
from pcgscore.scoring.pipeline import score_competition
from pcgscore.scoring.report import constants_document, export_results

app = typer.Typer()


def apply_overrides(config: ScoringConfig, **overrides: Any) -> ScoringConfig:
    """Return a validated copy of `config` with the non-None overrides applied.

    Raises:
        ConfigError: If an override is invalid
    """
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return config
    try:
        return ScoringConfig.model_validate({**config.model_dump(), **updates})
    except ValidationError as e:
        raise ConfigError(f"Invalid option: {e}") from e


@app.command()
def main(
    source_folder: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
            help="Competition folder with one sub-folder per team",
        ),
    ],
    config_path: Annotated[
        Path | None, typer.Option("--config", help="Path to scoring YAML config")
    ] = None,
    trials: Annotated[
        int | None, typer.Option("--trials", help="Number of trials per character")
    ] = None,
    diversity: Annotated[
        bool | None,
        typer.Option("--diversity/--no-diversity", help="Include the diversity axis"),
    ] = None,
    no_weights: Annotated[
        bool, typer.Option("--no-weights", help="Fix every character weight to 1")
    ] = False,
    lenient: Annotated[
        bool,
        typer.Option("--lenient", help="Skip teams with inconsistent files instead of aborting"),
    ] = False,
    max_concurrency: Annotated[
        int | None, typer.Option("--max-concurrency", help="Maximum concurrent file reads")
    ] = None,
) -> None:
    """Score a competition and rank its prompts."""
    console = get_console()

    print_banner()
    console.print()

    settings = Settings()
    try:
        config = load_scoring_config(config_path or settings.config_path)
        config = apply_overrides(
            config,
            num_trials=trials,
            diversity_enabled=diversity,
            disable_weights=True if no_weights else None,
            strict_validation=False if lenient else None,
            max_concurrency=max_concurrency,
        )
    except ConfigError as e:
        console.print(
            failed_badge(), f"[error]Error loading scoring config: {escape(str(e))}[/error]"
        )
        sys.exit(1)

    init_logfire(settings)

    with RunContext(source_folder / config.log_folder) as run:
        console.print(f"[dim]Run log: {run.log_path}[/dim]")
        try:
            result = score_competition(source_folder, config, run)
        except InconsistentTeamDataError as e:
            console.print(failed_badge(), f"[error]{escape(str(e))}[/error]")
            console.print("[error]Scoring aborted, no result files written[/error]")
            sys.exit(1)

        written = export_results(result, config, source_folder / config.result_folder)

    for team in result.skipped_teams:
        console.print(f"[warning]Skipped team with inconsistent files: {team}[/warning]")

    console.print(create_weights_table(constants_document(result, config)["weights"]))
    console.print()
    console.print(
        create_ranking_table(
            [
                {
                    "rank": entry.rank,
                    "team": entry.team,
                    "prompt_score": render(entry.prompt_score),
                    "normalized_prompt_score": render(entry.normalized_score),
                }
                for entry in result.rankings
            ]
        )
    )
    console.print()

    summary_text = Text.assemble(
        ("Teams scored: ", "info"),
        (f"{len(result.teams)}", "bold accent"),
        ("\n", "default"),
        ("Characters weighted: ", "info"),
        (f"{len(result.weights)}", "bold accent"),
        ("\n", "default"),
        ("Competition score: ", "info"),
        (render(result.competition_score), "bold accent"),
        ("\n\n", "default"),
        ("Output files:\n", "bold"),
        *((f"  - {path}\n", "default") for path in written),
    )
    console.print(success_badge(), "Scoring complete", style="success")
    console.print(Panel(summary_text, title="Scoring Complete!", border_style="accent"))


if __name__ == "__main__":
    app()

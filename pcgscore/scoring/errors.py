"""Exception classes for competition scoring."""


class ScoringError(Exception):
    """Base exception for scoring errors."""

    pass


class MissingDataError(ScoringError):
    """Raised when a result document is absent or unreadable.

    Always recovered by the result readers, which substitute the zero default.
    """

    def __init__(self, message: str, team: str, character: str, axis: str) -> None:
        self.team = team
        self.character = character
        self.axis = axis
        super().__init__(message)


class InconsistentTeamDataError(ScoringError):
    """Raised when a team's stability and similarity result files don't line up."""

    def __init__(self, team: str, stability_count: int, similarity_count: int) -> None:
        self.team = team
        self.stability_count = stability_count
        self.similarity_count = similarity_count
        if stability_count == 0 or similarity_count == 0:
            reason = "stability files or similarity files do not exist"
        else:
            reason = "number of stability files and similarity files are not equal"
        super().__init__(
            f"Team {team!r}: {reason} "
            f"(stability={stability_count}, similarity={similarity_count})"
        )

"""Errors raised by the meal diary services."""


class MealDiaryError(Exception):
    """Base class for recoverable diary errors."""


class AnalysisUnavailable(MealDiaryError):
    """Remote analysis is needed but no assistant is configured."""

    def __init__(self, description: str) -> None:
        super().__init__("Meal analysis is not available without an API key")
        self.description = description


class AnalysisFailed(MealDiaryError):
    """Remote analysis was attempted and did not produce valid data."""

    def __init__(self, description: str, reason: str) -> None:
        super().__init__(f"Meal analysis failed: {reason}")
        self.description = description
        self.reason = reason


class RecommendationFailed(MealDiaryError):
    """Recommendation request failed or returned invalid data."""


class ReportFailed(MealDiaryError):
    """Daily report request failed."""


class ActionInProgress(MealDiaryError):
    """The same action is already pending."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Action already in progress: {action}")
        self.action = action


class LoginRejected(MealDiaryError):
    """Username or password did not match."""


class ProfileMissing(MealDiaryError):
    """An action needs a profile but onboarding is not complete."""

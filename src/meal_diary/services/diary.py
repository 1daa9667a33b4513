"""Day-to-day diary actions: meals, mood, weight, reports and recommendations."""

import asyncio
import itertools
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date, timedelta
from uuid import uuid4

from meal_diary.domain.diary import AppState, DayLog, MealEntry, MealType, Mood
from meal_diary.domain.errors import (
    ActionInProgress,
    AnalysisFailed,
    AnalysisUnavailable,
    ProfileMissing,
)
from meal_diary.domain.models import UserProfile
from meal_diary.domain.recommendations import Recommendation
from meal_diary.services.clock import Clock
from meal_diary.services.meal_time import current_meal_type
from meal_diary.services.nutrition import NutritionResolver
from meal_diary.services.recommendations import RecommendationService
from meal_diary.services.reports import DailyReportService
from meal_diary.services.state import StateStore

DAY_NAMES = ("周一", "周二", "周三", "周四", "周五", "周六", "周日")
TREND_DAYS = 7

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyReport:
    """Report shown for the viewed date; text is None while pending."""

    date: date
    token: int
    text: str | None = None

    @property
    def pending(self) -> bool:
        """Return True while the report request is in flight."""
        return self.text is None


@dataclass(frozen=True)
class TrendPoint:
    """One day of the mood, health and weight charts."""

    date: date
    mood: Mood
    health: float
    weight: float | None


@dataclass
class DiaryService:
    """Service driving the dashboard for a single diary owner."""

    store: StateStore
    resolver: NutritionResolver
    recommendation_service: RecommendationService
    report_service: DailyReportService
    clock: Clock
    pending_inputs: dict[MealType, str] = field(default_factory=dict)
    accepted: dict[MealType, str] = field(default_factory=dict)
    recommendations: dict[MealType, list[Recommendation]] = field(
        default_factory=dict
    )
    report: DailyReport | None = None
    _viewed_date: date | None = field(default=None, init=False, repr=False)
    _in_flight: set[str] = field(default_factory=set, init=False, repr=False)
    _tasks: set[asyncio.Task[None]] = field(
        default_factory=set, init=False, repr=False
    )
    _tokens: Iterator[int] = field(
        default_factory=itertools.count, init=False, repr=False
    )

    @property
    def today(self) -> date:
        """Return today's date, rolling the stored current date if needed."""
        return self.store.refresh_date().current_date

    @property
    def viewed_date(self) -> date:
        """Return the date the dashboard shows, defaulting to today."""
        return self._viewed_date or self.today

    @property
    def busy_actions(self) -> frozenset[str]:
        """Return the keys of actions currently in flight."""
        return frozenset(self._in_flight)

    def current_meal_type(self) -> MealType:
        """Return the live meal slot for the current wall-clock time."""
        return current_meal_type(self.clock.now())

    def day(self, day: date) -> DayLog:
        """Return the log for a date without persisting a default."""
        return self.store.state.log_for(day)

    async def view_day(self, day: date, *, request_report: bool = True) -> DayLog:
        """Switch the viewed date, requesting a report for today when due."""
        self._viewed_date = day
        if self.report is not None and self.report.date != day:
            self.report = None
        log = self.day(day)
        if not request_report:
            return log
        if day == self.today and log.meals and self.report is None:
            self._schedule_report(day)
        return log

    async def submit_meal(
        self,
        description: str | None = None,
        meal_type: MealType | None = None,
        *,
        allow_unanalyzed: bool = False,
    ) -> MealEntry:
        """Resolve a meal description and append it to the viewed day."""
        profile = self._require_profile()
        day = self.viewed_date
        slot = meal_type or self.current_meal_type()
        if description is None:
            description = self.pending_inputs.get(slot, "")
        text = description.strip()
        if not text:
            raise ValueError("Meal description must not be empty")

        with self._action(f"submit:{day.isoformat()}:{slot}"):
            try:
                nutrition = await self.resolver.resolve(text, profile)
            except AnalysisUnavailable:
                if not allow_unanalyzed:
                    self.pending_inputs[slot] = text
                    raise
                nutrition = None
            except AnalysisFailed:
                self.pending_inputs[slot] = text
                raise

        entry = MealEntry(
            id=uuid4().hex,
            date=day,
            type=slot,
            description=text,
            nutrition=nutrition,
            is_recommended=self.accepted.get(slot) == text,
        )
        self.store.update(
            lambda state: state.with_log(state.log_for(day).with_meal(entry))
        )
        self.pending_inputs.pop(slot, None)
        self.accepted.pop(slot, None)
        _logger.info("Logged %s for %s", slot, day)

        if day == self.today and self.viewed_date == day:
            self._schedule_report(day)
        return entry

    def set_mood(self, day: date, mood: Mood) -> DayLog:
        """Record the mood for a date."""
        state = self.store.update(
            lambda current: current.with_log(
                current.log_for(day).model_copy(update={"mood": mood})
            )
        )
        return state.log_for(day)

    def update_weight(self, day: date, weight: float) -> DayLog:
        """Record a weight sample for a date and on the profile."""
        self._require_profile()
        if weight <= 0:
            raise ValueError("Weight must be positive")

        def change(current: AppState) -> AppState:
            log = current.log_for(day).model_copy(update={"weight": weight})
            user = current.user.model_copy(update={"weight": weight})
            return current.with_log(log).model_copy(update={"user": user})

        return self.store.update(change).log_for(day)

    def set_water_intake(self, day: date, cups: int) -> DayLog:
        """Record water intake in cups for a date."""
        if cups < 0:
            raise ValueError("Water intake must not be negative")
        state = self.store.update(
            lambda current: current.with_log(
                current.log_for(day).model_copy(update={"water_intake": cups})
            )
        )
        return state.log_for(day)

    async def fetch_recommendations(self, slot: MealType) -> list[Recommendation]:
        """Request candidate meals for a slot using the last week of logs."""
        profile = self._require_profile()
        with self._action(f"recommend:{slot}"):
            recommendations = await self.recommendation_service.recommend(
                slot, profile, self.store.state.sorted_logs()
            )
        self.recommendations[slot] = recommendations
        return recommendations

    def accept_recommendation(self, slot: MealType, name: str) -> str:
        """Use a recommendation as the pending input for its slot."""
        text = name.strip()
        if not text:
            raise ValueError("Recommendation name must not be empty")
        self.pending_inputs[slot] = text
        self.accepted[slot] = text
        return text

    def report_for(self, day: date) -> DailyReport | None:
        """Return the report shown for a date, if any."""
        if self.report is None or self.report.date != day:
            return None
        return self.report

    def trends(self) -> list[TrendPoint]:
        """Return chart points for the most recent logged days."""
        state = self.store.state
        fallback_weight = state.user.weight if state.user else None
        return [
            TrendPoint(
                date=log.date,
                mood=log.mood,
                health=log.average_health_score(),
                weight=log.weight or fallback_weight,
            )
            for log in state.sorted_logs()[-TREND_DAYS:]
        ]

    async def drain(self) -> None:
        """Wait for background report requests to finish."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending)

    def _schedule_report(self, day: date) -> None:
        token = next(self._tokens)
        self.report = DailyReport(date=day, token=token)
        # A newer request for the same date takes over the key.
        self._in_flight.add(_report_key(day))
        task = asyncio.get_running_loop().create_task(self._run_report(day, token))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_report(self, day: date, token: int) -> None:
        try:
            state = self.store.state
            log = state.log_for(day)
            if state.user is None or not log.meals:
                self._apply_report(day, token, None)
                return
            text = await self.report_service.summarize(log, state.user)
            self._apply_report(day, token, text)
        finally:
            current = self.report_for(day)
            if current is None or current.token == token:
                self._in_flight.discard(_report_key(day))

    def _apply_report(self, day: date, token: int, text: str | None) -> None:
        current = self.report_for(day)
        if self.viewed_date != day or current is None or current.token != token:
            _logger.info("Discarding stale report for %s", day)
            return
        if text is None:
            self.report = None
            return
        self.report = DailyReport(date=day, token=token, text=text)

    def _require_profile(self) -> UserProfile:
        user = self.store.state.user
        if user is None:
            raise ProfileMissing("Complete onboarding first")
        return user

    @contextmanager
    def _action(self, key: str) -> Iterator[None]:
        if key in self._in_flight:
            raise ActionInProgress(key)
        self._in_flight.add(key)
        try:
            yield
        finally:
            self._in_flight.discard(key)


def _report_key(day: date) -> str:
    return f"report:{day.isoformat()}"


def week_dates(day: date) -> list[date]:
    """Return the Monday-to-Sunday week containing a date."""
    monday = day - timedelta(days=day.weekday())
    return [monday + timedelta(days=offset) for offset in range(7)]


def day_name(day: date) -> str:
    """Return the short weekday label for a date."""
    return DAY_NAMES[day.weekday()]

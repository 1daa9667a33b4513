"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from meal_diary.api.schemas import (
    AcceptRecommendation,
    CalendarDay,
    DayOut,
    LoginRequest,
    MealSubmission,
    MealTypeOut,
    MoodUpdate,
    RecipeOut,
    ReportOut,
    TrendOut,
    WaterUpdate,
    WeightUpdate,
)
from meal_diary.app_logging import configure_logging
from meal_diary.containers import AppContainer
from meal_diary.domain.diary import AppState, DayLog, MealEntry, MealType
from meal_diary.domain.errors import (
    ActionInProgress,
    AnalysisFailed,
    AnalysisUnavailable,
    LoginRejected,
    MealDiaryError,
    ProfileMissing,
)
from meal_diary.domain.models import UserProfile
from meal_diary.domain.recommendations import Recommendation
from meal_diary.services.diary import day_name, week_dates

_ERROR_STATUS: dict[type[MealDiaryError], int] = {
    AnalysisUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    AnalysisFailed: status.HTTP_502_BAD_GATEWAY,
    ActionInProgress: status.HTTP_409_CONFLICT,
    ProfileMissing: status.HTTP_409_CONFLICT,
    LoginRejected: status.HTTP_401_UNAUTHORIZED,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(MealDiaryError)
    async def diary_error(request: Request, exc: MealDiaryError) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        content: dict[str, object] = {"detail": str(exc), "error": type(exc).__name__}
        if isinstance(exc, AnalysisUnavailable | AnalysisFailed):
            content["description"] = exc.description
        logger.info("%s %s -> %s", request.method, request.url.path, status_code)
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(ValueError)
    async def value_error(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc), "error": "ValueError"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/login")
    async def login(payload: LoginRequest, request: Request) -> AppState:
        """Check the fixed credentials and route to the next screen."""
        state_container: AppContainer = request.app.state.container
        return state_container.account_service.login(
            payload.username, payload.password
        )

    @app.post("/onboarding/next")
    async def onboarding_next(request: Request) -> AppState:
        """Advance to the second onboarding step."""
        state_container: AppContainer = request.app.state.container
        return state_container.account_service.advance_onboarding()

    @app.post("/onboarding/complete")
    async def onboarding_complete(profile: UserProfile, request: Request) -> AppState:
        """Store the onboarding profile and open the dashboard."""
        state_container: AppContainer = request.app.state.container
        return state_container.account_service.complete_onboarding(profile)

    @app.put("/profile")
    async def update_profile(profile: UserProfile, request: Request) -> AppState:
        """Replace the user profile."""
        state_container: AppContainer = request.app.state.container
        return state_container.account_service.update_profile(profile)

    @app.get("/state")
    async def get_state(request: Request) -> AppState:
        """Return the full persisted state."""
        state_container: AppContainer = request.app.state.container
        return state_container.state_store.refresh_date()

    @app.get("/meal-type")
    async def meal_type(request: Request) -> MealTypeOut:
        """Return the meal slot for the current time."""
        state_container: AppContainer = request.app.state.container
        slot = state_container.diary_service.current_meal_type()
        return MealTypeOut(meal_type=slot, label=slot.label)

    @app.get("/recipes/search")
    async def search_recipes(request: Request, q: str = "") -> list[RecipeOut]:
        """Autocomplete meal text from the recipe catalog."""
        state_container: AppContainer = request.app.state.container
        return [
            RecipeOut.from_record(record)
            for record in state_container.catalog.search(q.strip())
        ]

    @app.get("/days/{day}")
    async def get_day(day: date, request: Request) -> DayOut:
        """Open a date on the dashboard."""
        diary = request.app.state.container.diary_service
        log = await diary.view_day(day)
        is_today = day == diary.today
        return DayOut(
            log=log,
            is_today=is_today,
            meal_type=diary.current_meal_type() if is_today else None,
            pending_inputs=diary.pending_inputs,
            busy=sorted(diary.busy_actions),
        )

    @app.post("/days/{day}/meals", status_code=status.HTTP_201_CREATED)
    async def submit_meal(
        day: date, payload: MealSubmission, request: Request
    ) -> MealEntry:
        """Resolve and log a meal for a date."""
        diary = request.app.state.container.diary_service
        await diary.view_day(day, request_report=False)
        return await diary.submit_meal(
            payload.description,
            payload.meal_type,
            allow_unanalyzed=payload.allow_unanalyzed,
        )

    @app.put("/days/{day}/mood")
    async def set_mood(day: date, payload: MoodUpdate, request: Request) -> DayLog:
        """Record the mood for a date."""
        diary = request.app.state.container.diary_service
        return diary.set_mood(day, payload.mood)

    @app.put("/days/{day}/weight")
    async def set_weight(day: date, payload: WeightUpdate, request: Request) -> DayLog:
        """Record the weight for a date."""
        diary = request.app.state.container.diary_service
        return diary.update_weight(day, payload.weight)

    @app.put("/days/{day}/water")
    async def set_water(day: date, payload: WaterUpdate, request: Request) -> DayLog:
        """Record water intake for a date."""
        diary = request.app.state.container.diary_service
        return diary.set_water_intake(day, payload.cups)

    @app.get("/days/{day}/report")
    async def get_report(day: date, request: Request) -> ReportOut:
        """Return the daily report shown for a date."""
        diary = request.app.state.container.diary_service
        report = diary.report_for(day)
        if report is None:
            return ReportOut(date=day, text=None, pending=False)
        return ReportOut(date=day, text=report.text, pending=report.pending)

    @app.get("/calendar/{day}")
    async def calendar(day: date, request: Request) -> list[CalendarDay]:
        """Return the Monday-start week containing a date."""
        diary = request.app.state.container.diary_service
        today = diary.today
        return [
            CalendarDay(
                date=current,
                day_name=day_name(current),
                is_today=current == today,
                has_meals=bool(diary.day(current).meals),
            )
            for current in week_dates(day)
        ]

    @app.get("/trends")
    async def trends(request: Request) -> list[TrendOut]:
        """Return mood, health and weight chart points."""
        diary = request.app.state.container.diary_service
        return [
            TrendOut(
                date=point.date,
                mood=point.mood,
                health=point.health,
                weight=point.weight,
            )
            for point in diary.trends()
        ]

    @app.post("/recommendations/{slot}")
    async def recommend(slot: MealType, request: Request) -> list[Recommendation]:
        """Fetch candidate meals for a slot."""
        diary = request.app.state.container.diary_service
        return await diary.fetch_recommendations(slot)

    @app.post("/recommendations/{slot}/accept")
    async def accept(
        slot: MealType, payload: AcceptRecommendation, request: Request
    ) -> dict[str, str]:
        """Use a recommendation as the pending input for a slot."""
        diary = request.app.state.container.diary_service
        return {"pendingInput": diary.accept_recommendation(slot, payload.name)}

    return app

"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse

from calorie_tracker.api.models import (
    EstimateRequest,
    GetMealsRequest,
    LogMealRequest,
    SaveMealRequest,
    UserIdRequest,
)
from calorie_tracker.api.ui import CHAT_UI_HTML
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.meals import MealRecord
from calorie_tracker.domain.stats import DailySummary, RollingWindowEntry
from calorie_tracker.services.dashboard import DashboardSession
from calorie_tracker.services.meals import InvalidMealError
from calorie_tracker.services.users import (
    InvalidUserIdError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

INVALID_USER_ID = "Valid User ID is required (minimum 3 characters)"
USER_ID_REQUIRED = "userId is required"
SUPABASE_UNREACHABLE = (
    "Cannot connect to Supabase. Please check your SUPABASE_URL and network "
    "connection."
)
SUPABASE_URL_HINT = (
    "Verify SUPABASE_URL in .env file is correct "
    "(format: https://[project-ref].supabase.co)"
)


class ApiError(Exception):
    """Error rendered as a ``{"success": false, ...}`` JSON response."""

    def __init__(
        self,
        status_code: int,
        error: str,
        *,
        hint: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.hint = hint
        self.details = details

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {"success": False, "error": self.error}
        if self.hint:
            payload["hint"] = self.hint
        if self.details:
            payload["details"] = self.details
        return payload


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

    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "error": "Invalid request payload",
                "details": _describe_validation_error(exc),
            },
        )

    @app.get("/", response_class=HTMLResponse)
    async def chat_ui() -> HTMLResponse:
        """Serve the chat and dashboard page."""
        return HTMLResponse(CHAT_UI_HTML)

    @app.get("/health")
    async def health(request: Request) -> dict[str, str]:
        """Report store connectivity and AI configuration."""
        state_container: AppContainer = request.app.state.container
        reachable = state_container.user_service.is_store_reachable()
        return {
            "status": "ok",
            "database": "connected" if reachable else "disconnected",
            "openai": (
                "configured"
                if state_container.settings.openai_api_key
                else "not configured"
            ),
        }

    @app.post("/api/register")
    async def register(body: UserIdRequest, request: Request) -> dict[str, object]:
        """Register a new user id."""
        state_container: AppContainer = request.app.state.container
        try:
            user = state_container.user_service.register(body.user_id)
        except InvalidUserIdError as exc:
            raise ApiError(status.HTTP_400_BAD_REQUEST, INVALID_USER_ID) from exc
        except UserAlreadyExistsError as exc:
            raise ApiError(
                status.HTTP_400_BAD_REQUEST,
                "This User ID is already taken. "
                "Please choose a different one or login instead.",
            ) from exc
        except Exception as exc:
            logger.exception("Error in register endpoint")
            raise _server_error(
                state_container.settings, exc, "Failed to process user registration"
            ) from exc
        logger.info("New user registered: %s", user.user_id)
        return {
            "success": True,
            "userId": user.user_id,
            "message": "User registered successfully",
        }

    @app.post("/api/login")
    async def login(body: UserIdRequest, request: Request) -> dict[str, object]:
        """Log in with an existing user id."""
        state_container: AppContainer = request.app.state.container
        try:
            user = state_container.user_service.login(body.user_id)
        except InvalidUserIdError as exc:
            raise ApiError(status.HTTP_400_BAD_REQUEST, INVALID_USER_ID) from exc
        except UserNotFoundError as exc:
            raise ApiError(
                status.HTTP_404_NOT_FOUND,
                "User ID not found. Please register first.",
            ) from exc
        except Exception as exc:
            logger.exception("Error in login endpoint")
            raise _server_error(
                state_container.settings, exc, "Failed to process login"
            ) from exc
        logger.info("User logged in: %s", user.user_id)
        return {"success": True, "userId": user.user_id, "message": "Login successful"}

    @app.post("/api/estimate-calories")
    async def estimate_calories(
        body: EstimateRequest, request: Request
    ) -> dict[str, object]:
        """Estimate calories for a meal description."""
        state_container: AppContainer = request.app.state.container
        if not body.meal:
            raise ApiError(
                status.HTTP_400_BAD_REQUEST, "Meal description is required"
            )
        try:
            estimate = await state_container.estimation_service.estimate(
                body.meal, body.meal_type
            )
        except Exception as exc:
            logger.exception("Error estimating calories")
            raise _server_error(
                state_container.settings,
                exc,
                "Failed to estimate calories. Please try again.",
            ) from exc
        return {
            "success": True,
            "calories": estimate.calories,
            "breakdown": estimate.breakdown,
            "mealType": body.meal_type or "unknown",
        }

    @app.post("/api/save-meal")
    async def save_meal(body: SaveMealRequest, request: Request) -> dict[str, object]:
        """Persist a meal with its calories."""
        state_container: AppContainer = request.app.state.container
        try:
            record = state_container.meal_log_service.save_meal(
                body.user_id, body.meal, body.meal_type, body.calories
            )
        except InvalidMealError as exc:
            raise ApiError(status.HTTP_400_BAD_REQUEST, str(exc)) from exc
        except Exception as exc:
            logger.exception("Error saving meal to database")
            raise _server_error(
                state_container.settings, exc, "Failed to save meal to database"
            ) from exc
        logger.info(
            "Meal saved for user %s: %s (%s kcal)",
            record.user_id,
            record.meal_text,
            record.calories,
        )
        return {
            "success": True,
            "message": "Meal saved successfully",
            "data": [_serialize_meal(record)],
        }

    @app.post("/api/get-meals")
    async def get_meals(body: GetMealsRequest, request: Request) -> dict[str, object]:
        """Return a user's meal history, newest first."""
        state_container: AppContainer = request.app.state.container
        if not body.user_id:
            raise ApiError(status.HTTP_400_BAD_REQUEST, USER_ID_REQUIRED)
        try:
            meals = state_container.meal_log_service.list_meals(
                body.user_id, start=body.start_date, end=body.end_date
            )
        except Exception as exc:
            logger.exception("Error fetching meals")
            raise _server_error(
                state_container.settings, exc, "Failed to fetch meals from database"
            ) from exc
        return {"success": True, "meals": [_serialize_meal(meal) for meal in meals]}

    @app.post("/api/get-daily-totals")
    async def get_daily_totals(
        body: UserIdRequest, request: Request
    ) -> dict[str, object]:
        """Return daily and per-meal totals for the last seven days."""
        state_container: AppContainer = request.app.state.container
        if not body.user_id:
            raise ApiError(status.HTTP_400_BAD_REQUEST, USER_ID_REQUIRED)
        try:
            summary = state_container.stats_service.get_daily_summary(body.user_id)
        except Exception as exc:
            logger.exception("Error fetching daily totals")
            raise _server_error(
                state_container.settings, exc, "Failed to fetch daily totals"
            ) from exc
        return {"success": True, **_serialize_summary(summary)}

    @app.post("/api/dashboard")
    async def dashboard(body: UserIdRequest, request: Request) -> dict[str, object]:
        """Return today's counters and the 7-day chart series."""
        state_container: AppContainer = request.app.state.container
        if not body.user_id:
            raise ApiError(status.HTTP_400_BAD_REQUEST, USER_ID_REQUIRED)
        session = DashboardSession(user_id=body.user_id)
        try:
            session.refresh(state_container.stats_service)
        except Exception as exc:
            logger.exception("Error loading dashboard")
            raise _server_error(
                state_container.settings, exc, "Failed to load dashboard"
            ) from exc
        return {"success": True, **_render_dashboard(session)}

    @app.post("/api/log-meal")
    async def log_meal(body: LogMealRequest, request: Request) -> dict[str, object]:
        """Estimate a chat meal, save it and return the refreshed dashboard."""
        state_container: AppContainer = request.app.state.container
        if not body.user_id or not body.meal or not body.meal_type:
            raise ApiError(
                status.HTTP_400_BAD_REQUEST,
                "Missing required fields: userId, meal, mealType",
            )
        try:
            estimate = await state_container.estimation_service.estimate(
                body.meal, body.meal_type
            )
        except Exception as exc:
            logger.exception("Error estimating calories")
            raise _server_error(
                state_container.settings,
                exc,
                "Failed to estimate calories. Please try again.",
            ) from exc

        saved = True
        try:
            state_container.meal_log_service.save_meal(
                body.user_id, body.meal, body.meal_type, estimate.calories
            )
        except Exception:
            logger.exception(
                "Failed to save meal to database", extra={"user_id": body.user_id}
            )
            saved = False

        session = DashboardSession(user_id=body.user_id)
        try:
            session.refresh(state_container.stats_service)
        except Exception as exc:
            logger.exception("Error loading dashboard")
            raise _server_error(
                state_container.settings, exc, "Failed to load dashboard"
            ) from exc
        return {
            "success": True,
            "calories": estimate.calories,
            "breakdown": estimate.breakdown,
            "mealType": body.meal_type,
            "saved": saved,
            "dashboard": _render_dashboard(session),
        }

    return app


def _server_error(settings: Settings, exc: Exception, fallback: str) -> ApiError:
    """Build a 500 error, adding a hint for Supabase connection failures."""
    if isinstance(exc, httpx.ConnectError):
        return ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            SUPABASE_UNREACHABLE,
            hint=SUPABASE_URL_HINT,
        )
    details = str(exc) or None
    if settings.environment == "local":
        details = f"{type(exc).__name__}: {exc}".strip()
    return ApiError(
        status.HTTP_500_INTERNAL_SERVER_ERROR, fallback, details=details
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Request body could not be parsed"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}" if location else message


def _serialize_meal(record: MealRecord) -> dict[str, object]:
    """Render a meal using the Output table's column names."""
    return {
        "id": record.id,
        "userid": record.user_id,
        "Meal": record.meal_text,
        "Type of Meal": record.meal_type,
        "Calories": record.calories,
        "created_at": record.created_at.isoformat(),
    }


def _serialize_summary(summary: DailySummary) -> dict[str, object]:
    return {
        "dailyTotals": {
            day.isoformat(): total for day, total in summary.daily_totals.items()
        },
        "mealTypeTotals": {
            day.isoformat(): totals.as_dict()
            for day, totals in summary.meal_type_totals.items()
        },
        "rollingWindow": _serialize_window(summary.rolling_window),
    }


def _render_dashboard(session: DashboardSession) -> dict[str, object]:
    """Render session counters and chart series for the chat page."""
    return {
        "today": {**session.today.as_dict(), "total": session.total},
        "week": _serialize_window(session.rolling_window()),
    }


def _serialize_window(entries: list[RollingWindowEntry]) -> list[dict[str, object]]:
    return [
        {"label": entry.label, "date": entry.day.isoformat(), "calories": entry.total}
        for entry in entries
    ]

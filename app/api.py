import itertools
from collections.abc import Callable
from datetime import UTC, datetime

from fastapi import APIRouter, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import Settings, get_settings
from app.database import InMemoryKeyValueDatabase
from app.logger import configure_logging, get_logger
from app.models import MonthYear, Shift, Signup, Volunteer
from app.quota import QuotaService
from app.rules import SchedulingRulesEngine
from app.seed import seed_sample_data

router = APIRouter()
logger = get_logger(__name__)

NowFn = Callable[[], datetime]
Database = InMemoryKeyValueDatabase[str, Volunteer | Shift | Signup]


class SignupRequest(BaseModel):
    volunteer_id: str
    shift_id: str
    is_emergency_pickup: bool = False


def _db(request: Request) -> Database:
    return request.app.state.database


def _month_year(
    request: Request, month: int | None, year: int | None
) -> MonthYear:
    now_fn: NowFn = request.app.state.now_fn
    now = now_fn()
    return MonthYear(month=month or now.month, year=year or now.year)


def _rejected(errors: list[str]) -> JSONResponse:
    return JSONResponse(
        status_code=400, content={"success": False, "errors": errors}
    )


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/shifts")
async def list_shifts(
    request: Request,
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=1),
) -> list[dict]:
    db = _db(request)
    target = _month_year(request, month, year)

    signups = db.of_type(Signup)
    shifts = sorted(
        (s for s in db.of_type(Shift) if s.month_year == target),
        key=lambda s: (s.date, s.start_time, s.id),
    )

    result = []
    for shift in shifts:
        taken = sum(1 for s in signups if s.shift.id == shift.id)
        result.append(
            {
                "id": shift.id,
                "date": shift.date.isoformat(),
                "type": shift.type.value,
                "max_capacity": shift.max_capacity,
                "current_signups": taken,
                "spots_available": max(0, shift.max_capacity - taken),
                "start_time": shift.start_time,
                "end_time": shift.end_time,
                "is_full": taken >= shift.max_capacity,
            }
        )
    return result


@router.get("/volunteers/{volunteer_id}/quota")
async def get_quota(
    volunteer_id: str,
    request: Request,
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=1),
) -> dict:
    db = _db(request)
    volunteer = db.get(f"volunteer:{volunteer_id}")
    if not volunteer or not isinstance(volunteer, Volunteer):
        raise HTTPException(status_code=404, detail="Volunteer not found")

    target = _month_year(request, month, year)
    quota_service: QuotaService = request.app.state.quota_service
    quota = quota_service.calculate_quota(
        volunteer, target.month, target.year, db.of_type(Signup)
    )

    return {
        "volunteer_id": volunteer_id,
        "month": target.month,
        "year": target.year,
        "current_signups": quota.total.current,
        "max_signups": quota.total.max,
        "remaining_quota": quota.total.remaining,
        "breakdown": quota.model_dump(),
    }


@router.get("/volunteers/{volunteer_id}/signups")
async def list_volunteer_signups(
    volunteer_id: str,
    request: Request,
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=1),
) -> dict:
    db = _db(request)
    target = _month_year(request, month, year)

    signups = sorted(
        (
            s
            for s in db.of_type(Signup)
            if s.volunteer.id == volunteer_id and s.shift.month_year == target
        ),
        key=lambda s: (s.shift.date, s.shift.start_time),
    )

    return {
        "volunteer_id": volunteer_id,
        "month": target.month,
        "year": target.year,
        "signups": [
            {
                "id": s.id,
                "shift_id": s.shift.id,
                "date": s.shift.date.isoformat(),
                "type": s.shift.type.value,
                "start_time": s.shift.start_time,
                "end_time": s.shift.end_time,
                "signup_date": s.signup_date.isoformat(),
                "is_emergency_pickup": s.is_emergency_pickup,
            }
            for s in signups
        ],
    }


@router.post("/signups", status_code=201)
async def create_signup(body: SignupRequest, request: Request):
    db = _db(request)

    volunteer = db.get(f"volunteer:{body.volunteer_id}")
    if not volunteer or not isinstance(volunteer, Volunteer):
        raise HTTPException(status_code=404, detail="Volunteer not found")

    shift = db.get(f"shift:{body.shift_id}")
    if not shift or not isinstance(shift, Shift):
        raise HTTPException(status_code=404, detail="Shift not found")

    # read, validate and write with no awaits in between so two requests
    # for the same volunteer can't both see the pre-cap count
    existing = db.of_type(Signup)

    engine: SchedulingRulesEngine = request.app.state.rules_engine
    decision = engine.validate_signup(
        volunteer, shift, existing, body.is_emergency_pickup
    )
    if not decision.allowed:
        logger.info(
            "signup rejected",
            extra={
                "volunteer_id": volunteer.id,
                "shift_id": shift.id,
                "reasons": list(decision.reasons),
            },
        )
        return _rejected(list(decision.reasons))

    if any(
        s.volunteer.id == volunteer.id and s.shift.id == shift.id
        for s in existing
    ):
        return _rejected(["You are already signed up for this shift"])

    if sum(1 for s in existing if s.shift.id == shift.id) >= shift.max_capacity:
        return _rejected(["Shift is full"])

    signup = Signup(
        id=f"signup-{next(request.app.state.signup_ids)}",
        volunteer=volunteer,
        shift=shift,
        signup_date=request.app.state.now_fn(),
        is_emergency_pickup=body.is_emergency_pickup,
    )
    if not db.put_if_absent(f"signup:{volunteer.id}:{shift.id}", signup):
        return _rejected(["You are already signed up for this shift"])

    logger.info(
        "signup created",
        extra={
            "signup_id": signup.id,
            "volunteer_id": volunteer.id,
            "shift_id": shift.id,
            "is_emergency_pickup": signup.is_emergency_pickup,
        },
    )

    return {
        "success": True,
        "signup": {
            "id": signup.id,
            "volunteer_id": volunteer.id,
            "shift_id": shift.id,
            "signup_date": signup.signup_date.isoformat(),
            "is_emergency_pickup": signup.is_emergency_pickup,
        },
    }


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title=settings.service_name)
    db: Database = InMemoryKeyValueDatabase()
    if settings.seed_sample_data:
        seed_sample_data(db)
    app.state.database = db

    app.state.settings = settings
    configure_logging(logger, settings)
    app.state.now_fn = lambda: datetime.now(UTC)
    app.state.rules_engine = SchedulingRulesEngine()
    app.state.quota_service = QuotaService()
    app.state.signup_ids = itertools.count(1)

    app.include_router(router)
    return app

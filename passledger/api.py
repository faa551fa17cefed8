from fastapi import Depends, FastAPI, Header, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .exceptions import (
    AuthorizationError,
    InsufficientResourceError,
    LedgerError,
    LedgerValidationError,
    NotFoundError,
    StateConflictError,
)
from .logging_config import setup_logging
from .models import (
    Attended,
    CollectibleDetails,
    CollectibleRedeemed,
    CollectibleSeries,
    ConfigureTierRequest,
    CreateSeriesRequest,
    HolderSummary,
    IdentifierResponse,
    OwnedCollectibles,
    PassPurchased,
    Performance,
    PurchaseRequest,
    ScheduleRequest,
    ScheduleResponse,
    SeriesResponse,
    SetOrganizerRequest,
    SetSeriesActiveRequest,
    TierConfig,
    Withdrawn,
    WithdrawRequest,
)
from .service import LedgerService

settings = get_settings()
setup_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    description="Tiered passes, attendance rewards and numbered collectibles on one serialized ledger",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ledger_service = LedgerService(settings=settings)

ERROR_STATUS = (
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (LedgerValidationError, status.HTTP_400_BAD_REQUEST),
    (StateConflictError, status.HTTP_409_CONFLICT),
    (InsufficientResourceError, status.HTTP_402_PAYMENT_REQUIRED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
)


def get_service() -> LedgerService:
    return ledger_service


def get_caller(x_caller: str = Header(..., description="Identity of the calling address")) -> str:
    return x_caller


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, code in ERROR_STATUS:
        if isinstance(exc, error_type):
            status_code = code
            break
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": exc.code, "message": exc.message, "details": exc.details}},
    )


@app.get("/health", tags=["System"])
def health_check():
    return {"status": "healthy", "service": "pass-ledger"}


# Passes

@app.put("/tiers/{tier}", response_model=TierConfig, tags=["Passes"])
def configure_tier(
    tier: int,
    request: ConfigureTierRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_service),
) -> TierConfig:
    return service.configure(caller, tier, request.price, request.max_supply)


@app.get("/tiers/{tier}", response_model=TierConfig, tags=["Passes"])
def get_tier(tier: int, service: LedgerService = Depends(get_service)) -> TierConfig:
    return service.tier_info(tier)


@app.post(
    "/tiers/{tier}/purchase",
    response_model=PassPurchased,
    status_code=status.HTTP_201_CREATED,
    tags=["Passes"],
)
def purchase_pass(
    tier: int,
    request: PurchaseRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_service),
) -> PassPurchased:
    return service.purchase(caller, tier, request.payment)


# Performances

@app.post(
    "/performances",
    response_model=ScheduleResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Performances"],
)
def schedule_performance(
    request: ScheduleRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_service),
) -> ScheduleResponse:
    performance_id = service.schedule(caller, request.start_time, request.duration, request.base_reward)
    return ScheduleResponse(
        performance=service.get_performance(performance_id),
        message="Performance scheduled successfully",
    )


@app.get("/performances/{performance_id}", response_model=Performance, tags=["Performances"])
def get_performance(performance_id: int, service: LedgerService = Depends(get_service)) -> Performance:
    return service.get_performance(performance_id)


@app.get("/performances/{performance_id}/active", tags=["Performances"])
def performance_active(performance_id: int, service: LedgerService = Depends(get_service)):
    return {"performance_id": performance_id, "active": service.is_active(performance_id)}


@app.post("/performances/{performance_id}/attend", response_model=Attended, tags=["Performances"])
def attend_performance(
    performance_id: int,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_service),
) -> Attended:
    return service.attend(caller, performance_id)


# Collectibles

@app.post("/series", response_model=SeriesResponse, status_code=status.HTTP_201_CREATED, tags=["Collectibles"])
def create_series(
    request: CreateSeriesRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_service),
) -> SeriesResponse:
    series_id = service.create_series(
        caller,
        request.name,
        request.metadata_base,
        request.unit_price,
        request.max_items,
        request.activate_now,
    )
    return SeriesResponse(series=service.get_series(series_id), message="Series created successfully")


@app.get("/series/{series_id}", response_model=CollectibleSeries, tags=["Collectibles"])
def get_series(series_id: int, service: LedgerService = Depends(get_service)) -> CollectibleSeries:
    return service.get_series(series_id)


@app.patch("/series/{series_id}", response_model=CollectibleSeries, tags=["Collectibles"])
def set_series_active(
    series_id: int,
    request: SetSeriesActiveRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_service),
) -> CollectibleSeries:
    return service.set_series_active(caller, series_id, request.active)


@app.post(
    "/series/{series_id}/redeem",
    response_model=CollectibleRedeemed,
    status_code=status.HTTP_201_CREATED,
    tags=["Collectibles"],
)
def redeem_collectible(
    series_id: int,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_service),
) -> CollectibleRedeemed:
    return service.redeem(caller, series_id)


@app.get("/tokens/{token_id}", response_model=CollectibleDetails, tags=["Collectibles"])
def get_token(token_id: int, service: LedgerService = Depends(get_service)) -> CollectibleDetails:
    return service.details_of(token_id)


@app.get("/codec/encode", response_model=IdentifierResponse, tags=["Collectibles"])
def encode_identifier(series_id: int, item: int) -> IdentifierResponse:
    return IdentifierResponse(token_id=LedgerService.encode(series_id, item), series_id=series_id, item=item)


@app.get("/codec/decode/{token_id}", response_model=IdentifierResponse, tags=["Collectibles"])
def decode_identifier(token_id: int) -> IdentifierResponse:
    series_id, item = LedgerService.decode(token_id)
    return IdentifierResponse(token_id=token_id, series_id=series_id, item=item)


# Holders

@app.get("/holders/{holder}", response_model=HolderSummary, tags=["Holders"])
def get_holder(holder: str, service: LedgerService = Depends(get_service)) -> HolderSummary:
    return service.holder_summary(holder)


@app.get("/holders/{holder}/collectibles", response_model=OwnedCollectibles, tags=["Holders"])
def get_holder_collectibles(holder: str, service: LedgerService = Depends(get_service)) -> OwnedCollectibles:
    return service.owned_collectibles_of(holder)


# Administration

@app.put("/admin/organizer", tags=["Admin"])
def set_organizer(
    request: SetOrganizerRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_service),
):
    service.set_organizer(caller, request.address)
    return {"organizer": service.organizer}


@app.post("/admin/withdraw", response_model=Withdrawn, tags=["Admin"])
def withdraw(
    request: WithdrawRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_service),
) -> Withdrawn:
    return service.withdraw(caller, request.target)


@app.get("/events", tags=["System"])
def list_events(since: int = 0, service: LedgerService = Depends(get_service)) -> list[dict]:
    return [event.model_dump(mode="json") for event in service.events(since)]


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

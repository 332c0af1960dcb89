import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from schemas.common import DataResponse
from schemas.health import HealthOut
from services.health_service import HealthService

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "",
    response_model=DataResponse[HealthOut],
    summary="Service health",
    responses={503: {"description": "Database unreachable in production"}},
)
async def health_check():
    """Never cached. Reports 200 while degraded outside production."""
    started = time.perf_counter()
    health, status_code = await HealthService.check()
    body = DataResponse[HealthOut](data=health).model_dump(mode="json", by_alias=True)
    elapsed_ms = (time.perf_counter() - started) * 1000
    return JSONResponse(
        status_code=status_code,
        content=body,
        headers={
            "Cache-Control": "no-cache, no-store, must-revalidate",
            "X-Response-Time": f"{elapsed_ms:.2f}ms",
        },
    )

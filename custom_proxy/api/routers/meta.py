from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
def healthz():
    # credentials arrive per request, so there is nothing external to ping
    return {"status": "ok"}

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
def health_check():
    """Liveness probe. Does not touch the database."""
    return {"status": "ok", "message": "Server is running"}

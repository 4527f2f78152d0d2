from fastapi import APIRouter

router = APIRouter(tags=['health'])


@router.get('/health')
async def health_check():
    """Liveness probe. Does not touch the store."""
    return {'ok': True}

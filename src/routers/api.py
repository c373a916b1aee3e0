from fastapi import APIRouter

from routers import convert, sensor, session

router = APIRouter()

# include sub-routers
router.include_router(session.router)
router.include_router(sensor.router)
router.include_router(convert.router)

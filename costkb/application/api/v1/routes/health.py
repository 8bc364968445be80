from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from costkb.domain.shared.error import StorageUnavailableError

router = APIRouter(tags=["Health"], route_class=DishkaRoute)


@router.get("/health")
async def health(engine: FromDishka[AsyncEngine]) -> dict[str, str]:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise StorageUnavailableError(f"Database unavailable: {e}") from e
    return {"status": "ok"}

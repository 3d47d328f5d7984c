"""Plant identification and supplemental plant data."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
import httpx

from app.core.exceptions import InvalidInput
from app.core.redis_client import PlantDetailsCache, get_plant_details_cache
from app.core.security import get_current_user_id
from app.services.plant_lookup import fetch_plant_details, get_http_client, identify_plant

router = APIRouter()


class IdentifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    base64_image: str = Field(default="", alias="base64Image")


@router.post("/identify")
async def identify(
    request: IdentifyRequest,
    user_id: int = Depends(get_current_user_id),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Identify a plant from a base64-encoded photo via Plant.id."""
    if not request.base64_image:
        raise InvalidInput("No image data provided for identification.")
    return await identify_plant(client, request.base64_image)


@router.get("/plant-details/{scientific_name}")
async def plant_details(
    scientific_name: str,
    user_id: int = Depends(get_current_user_id),
    client: httpx.AsyncClient = Depends(get_http_client),
    cache: PlantDetailsCache = Depends(get_plant_details_cache),
):
    """Fetch supplemental care data for a species from Trefle."""
    if not scientific_name.strip():
        raise InvalidInput("Scientific name is required for detail lookup.")
    return await fetch_plant_details(client, scientific_name, cache=cache)

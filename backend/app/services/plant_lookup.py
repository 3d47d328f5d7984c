"""Clients for the third-party plant APIs.

Plant.id identifies a plant from a photo; Trefle supplies botanical detail
for a scientific name. Both are treated as opaque request/response services.
"""
import logging
from typing import AsyncIterator, Optional

import httpx

from app.core.config import settings
from app.core.exceptions import ExternalServiceError, NotFound
from app.core.redis_client import PlantDetailsCache

logger = logging.getLogger(__name__)

IDENTIFY_DETAILS = [
    "common_names",
    "url",
    "wiki_description",
    "taxonomy",
    "edible_parts",
    "propagation_methods",
    "watering",
    "sunlight",
]


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Request-scoped outbound HTTP client."""
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        yield client


def strip_data_uri(image: str) -> str:
    """Plant.id wants bare base64, without a data:image/...;base64, prefix."""
    if image.startswith("data:") and "," in image:
        return image.split(",", 1)[1]
    return image


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict):
        return body.get("detail") or body.get("message") or default
    return default


async def identify_plant(client: httpx.AsyncClient, base64_image: str) -> dict:
    """Submit an image to Plant.id and return its JSON verdict unchanged."""
    if not settings.PLANT_ID_API_KEY:
        raise ExternalServiceError("PLANT_ID_API_KEY is missing from server environment.", status_code=500)

    try:
        response = await client.post(
            settings.PLANT_ID_API_URL,
            headers={"Api-Key": settings.PLANT_ID_API_KEY},
            json={"images": [strip_data_uri(base64_image)], "details": IDENTIFY_DETAILS},
        )
    except httpx.HTTPError as e:
        logger.error(f"Network error during identification: {e}")
        raise ExternalServiceError("Could not connect to external identification service.") from e

    if response.is_success:
        return response.json()

    logger.error(f"Plant.id API error {response.status_code}: {response.text[:500]}")
    raise ExternalServiceError(
        _error_message(response, "External identification API failed."),
        status_code=response.status_code,
    )


async def fetch_plant_details(
    client: httpx.AsyncClient,
    scientific_name: str,
    cache: Optional[PlantDetailsCache] = None,
) -> dict:
    """Look a species up on Trefle: search by name, then fetch the first hit in full."""
    if not settings.TREFLE_API_KEY:
        raise ExternalServiceError("TREFLE_API_KEY is missing from server environment.", status_code=500)

    if cache is not None:
        cached = cache.get_details(scientific_name)
        if cached is not None:
            logger.debug(f"Plant details cache hit for {scientific_name!r}")
            return cached

    base_url = settings.TREFLE_API_URL.rstrip("/")
    token = {"token": settings.TREFLE_API_KEY}
    try:
        response = await client.get(f"{base_url}/plants/search", params={**token, "q": scientific_name})
        matches = response.json().get("data") if response.is_success else None
        if not matches:
            raise NotFound("Supplemental details not found on Trefle API.")

        trefle_id = matches[0]["id"]
        response = await client.get(f"{base_url}/plants/{trefle_id}", params=token)
        details = response.json().get("data") if response.is_success else None
        if not details:
            raise NotFound("Supplemental details not found on Trefle API.")
    except httpx.HTTPError as e:
        logger.error(f"Network error fetching Trefle data: {e}")
        raise ExternalServiceError("Could not connect to external Trefle service.") from e
    except (ValueError, AttributeError, KeyError, TypeError) as e:
        # Non-JSON body, or JSON that is not the expected object shape
        logger.error(f"Unreadable Trefle response for {scientific_name!r}: {e}")
        raise ExternalServiceError("External Trefle service returned an invalid response.", status_code=502) from e

    if cache is not None:
        cache.set_details(scientific_name, details)
    return details

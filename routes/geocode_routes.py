# geocode_routes.py
from fastapi import APIRouter, HTTPException, Query

from services.geocoding import reverse_geocode

router = APIRouter(tags=["Geocode"])


# Resolves coordinates to a "Ward, City" label for the report form
@router.get("/reverse")
def reverse(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
):
    location_name = reverse_geocode(lat, lng)
    if not location_name:
        raise HTTPException(status_code=502, detail="Reverse geocoding failed")
    return {"locationName": location_name}

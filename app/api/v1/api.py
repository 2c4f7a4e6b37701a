from fastapi import APIRouter

from app.api.v1.endpoints import auth, listings, viewings

api_router = APIRouter()

# Authentication endpoints
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])

# Listing catalog endpoints
api_router.include_router(listings.router, prefix="/listings", tags=["listings"])

# Viewing scheduling endpoints
api_router.include_router(
    viewings.router, prefix="/property-viewings", tags=["property viewings"]
)

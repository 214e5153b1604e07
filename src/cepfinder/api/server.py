"""
FastAPI server for cepfinder.

Exposes a health endpoint at `/health`, a welcome message at `/`, and
`/address/{postal_code}` which races the registered providers and returns
the first address found.
"""

from typing import Optional

from fastapi import FastAPI, HTTPException, Query

from cepfinder.address import (
    AddressLookupError,
    AddressResult,
    AddressService,
    NoProvidersError,
    NoProviderSucceededError,
    ProviderConfigError,
    RequestTimeoutError,
)

app = FastAPI(title="cepfinder API", version="0.1.0")


def get_service(timeout: Optional[float] = None) -> AddressService:
    return AddressService(timeout=timeout)


@app.get("/health", summary="Health check", tags=["system"])
async def health() -> dict[str, str]:
    """Return a simple health check status."""
    return {"status": "ok"}


@app.get("/", summary="Welcome", tags=["system"])
async def root() -> dict[str, str]:
    """Return a welcome message."""
    return {"message": "Welcome to the cepfinder API"}


@app.get(
    "/address/{postal_code}",
    response_model=AddressResult,
    summary="Resolve a postal code",
    tags=["address"],
)
def address(
    postal_code: str,
    timeout: Optional[float] = Query(None, gt=0, description="Deadline in seconds"),
) -> AddressResult:
    """Race every provider and return the first address found."""
    try:
        return get_service(timeout).execute(postal_code)
    except RequestTimeoutError as e:
        raise HTTPException(status_code=504, detail=str(e))
    except NoProviderSucceededError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except (NoProvidersError, ProviderConfigError) as e:
        raise HTTPException(status_code=503, detail=str(e))
    except AddressLookupError as e:
        raise HTTPException(status_code=500, detail=str(e))

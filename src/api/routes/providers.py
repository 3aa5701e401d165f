"""Provider API routes.

Endpoints:
- GET /provider: List all providers
- GET /provider/{id}: Get a provider
- POST /provider: Create a provider (authenticated)
- PUT /provider/{id}: Update a provider (authenticated)
- DELETE /provider/{id}: Delete a provider (DeleteProvider claim)
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from api.dependencies import get_provider_repo
from api.models import AuthenticatedUser, ProviderRequest, ProviderResponse, ValidationProblemResponse
from api.responses import validation_problem
from api.security import get_current_user_required, require_delete_provider
from domain.model.errors import NotFoundError, PersistenceError, ValidationError
from domain.model.provider import Provider
from port.provider_repository import ProviderRepository
from services import provider_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/provider", tags=["provider"])


def _to_response(provider: Provider) -> ProviderResponse:
    return ProviderResponse(id=provider.id, name=provider.name, document=provider.document)


@router.get("", response_model=list[ProviderResponse], name="GetProviders")
async def list_providers(repo: ProviderRepository = Depends(get_provider_repo)):
    """List every provider."""
    return [_to_response(p) for p in provider_service.list_providers(repo)]


@router.get(
    "/{provider_id}",
    response_model=ProviderResponse,
    responses={404: {"description": "Provider not found"}},
    name="GetProviderById",
)
async def get_provider(provider_id: uuid.UUID, repo: ProviderRepository = Depends(get_provider_repo)):
    """Get a provider by ID."""
    try:
        provider = provider_service.get_provider(repo, str(provider_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(provider)


@router.post(
    "",
    response_model=ProviderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationProblemResponse}},
    name="PostProvider",
)
async def create_provider(
    body: ProviderRequest,
    request: Request,
    response: Response,
    current_user: AuthenticatedUser = Depends(get_current_user_required),
    repo: ProviderRepository = Depends(get_provider_repo),
):
    """Create a provider. The Location header points at the new resource."""
    try:
        provider = provider_service.create_provider(repo, name=body.name, document=body.document)
    except ValidationError as e:
        return validation_problem(e.errors)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    response.headers["Location"] = str(request.url_for("GetProviderById", provider_id=provider.id))
    logger.info("Provider created via API", extra={"providerId": provider.id, "userId": current_user.id})
    return _to_response(provider)


@router.put(
    "/{provider_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ValidationProblemResponse}, 404: {"description": "Provider not found"}},
    name="PutProvider",
)
async def update_provider(
    provider_id: uuid.UUID,
    body: ProviderRequest,
    current_user: AuthenticatedUser = Depends(get_current_user_required),
    repo: ProviderRepository = Depends(get_provider_repo),
):
    """Overwrite a provider's name and document."""
    try:
        provider_service.update_provider(repo, str(provider_id), name=body.name, document=body.document)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        return validation_problem(e.errors)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{provider_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Provider not found"}},
    name="DeleteProvider",
)
async def delete_provider(
    provider_id: uuid.UUID,
    current_user: AuthenticatedUser = Depends(require_delete_provider),
    repo: ProviderRepository = Depends(get_provider_repo),
):
    """Delete a provider. Requires the DeleteProvider claim."""
    try:
        provider_service.delete_provider(repo, str(provider_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("Provider deleted via API", extra={"providerId": str(provider_id), "userId": current_user.id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)

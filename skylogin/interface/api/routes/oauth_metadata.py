"""Client metadata document, whose URL doubles as the OAuth client_id."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from skylogin.adapter.atproto.oauth_client import (
    OAuthClientMetadata,
    build_client_metadata,
)
from skylogin.config import Settings

router = APIRouter(route_class=DishkaRoute)


@router.get(
    "/client-metadata.json",
    response_model=OAuthClientMetadata,
    response_model_exclude_none=True,
)
def get_oauth_client_metadata(settings: FromDishka[Settings]) -> OAuthClientMetadata:
    """Serve the metadata authorization servers fetch to identify this client.

    Must be reachable at the public URL over HTTPS outside development.
    Unset optional fields (jwks, signing alg) are left out.

    Example response:
        {
            "client_id": "https://login.example.com/client-metadata.json",
            "client_name": "ATProto OAuth Example",
            "client_uri": "https://login.example.com",
            "redirect_uris": ["https://login.example.com/oauth/callback"],
            "grant_types": ["authorization_code", "refresh_token"],
            "response_types": ["code"],
            "scope": "atproto transition:generic",
            "token_endpoint_auth_method": "none",
            "application_type": "web",
            "dpop_bound_access_tokens": true
        }
    """
    return build_client_metadata(settings)

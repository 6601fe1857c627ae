"""
Pet store example for gateway_lambda

This example demonstrates how to:
1. Protect an API with a TOKEN authorizer that returns IAM policies
2. Create resources with a validated JSON request body
3. Read resources by path parameter and raise typed errors
4. Add CORS and caching response headers

Deploy each `*_handler` function as its own Lambda function:

- `authorizer_handler` as the API's custom authorizer (identity source: Authorization header)
- `create_pet_handler` on POST /pets
- `get_pet_handler` on GET /pets/{pet_id}

NOTE: Tokens are compared against a hardcoded table for demonstration.
Use a real identity provider (Cognito, an OIDC issuer) in production.
"""

from http import HTTPStatus
from itertools import count
from typing import Dict, Optional

from pydantic import BaseModel, Field

from gateway_lambda import (
    APIGatewayAuthorizer,
    HTTPException,
    RequestHandler,
    configure_logging,
    create_lambda_handler,
    policy,
)

logger = configure_logging()

# ============================================================================
# MOCK STORAGE (Replace with DynamoDB in production)
# ============================================================================

USERS_BY_TOKEN: Dict[str, str] = {
    "alice-token": "alice",
    "bob-token": "bob",
}

PETS: Dict[int, dict] = {}
_ids = count(1)


# ============================================================================
# MODELS
# ============================================================================


class NewPet(BaseModel):
    name: str = Field(min_length=1)
    tag: Optional[str] = None


class Pet(NewPet):
    id: int
    owner: Optional[str] = None


# ============================================================================
# AUTHORIZER
# ============================================================================


class PetStoreAuthorizer(APIGatewayAuthorizer):
    def before(self, event, context):
        if not event.get("authorizationToken"):
            raise HTTPException(HTTPStatus.UNAUTHORIZED)

    def authorize(self, request, context):
        credentials = request.credentials
        if credentials is None or not credentials.is_bearer:
            raise HTTPException(HTTPStatus.UNAUTHORIZED)

        user = USERS_BY_TOKEN.get(credentials.credentials)
        if user is None:
            raise HTTPException(HTTPStatus.FORBIDDEN)

        # Grant the whole stage so the cached policy also covers the other routes
        stage_arn = f"arn:aws:execute-api:{request.region}:{request.aws_account_id}:{request.rest_api_id}/{request.stage}/*/*"
        return policy.allow(user, stage_arn, {"user": user})


# ============================================================================
# REQUEST HANDLERS
# ============================================================================


class CreatePet(RequestHandler):
    def __init__(self):
        super().__init__(schema=NewPet)

    def before(self, event, context):
        self.request.cors("*")

    def execute(self, body, context):
        new_pet = NewPet.model_validate(body)
        owner = (self.request.get_request_context_parameter("authorizer") or {}).get("user")
        pet = Pet(id=next(_ids), owner=owner, **new_pet.model_dump())
        PETS[pet.id] = pet.model_dump()
        logger.info("Created pet %s", pet.id)
        return pet


class GetPet(RequestHandler):
    def before(self, event, context):
        self.request.cors("*")

    def execute(self, body, context):
        pet_id = self.request.get_path_parameter("pet_id")
        if pet_id is None or not pet_id.isdigit():
            raise HTTPException(HTTPStatus.BAD_REQUEST, {"message": "pet_id must be a number"})

        pet = PETS.get(int(pet_id))
        if pet is None:
            raise HTTPException(HTTPStatus.NOT_FOUND, {"message": f"Pet {pet_id} not found"})

        self.request.add_response_header("Cache-Control", "max-age=60")
        return pet


authorizer_handler = create_lambda_handler(PetStoreAuthorizer())
create_pet_handler = create_lambda_handler(CreatePet())
get_pet_handler = create_lambda_handler(GetPet())

"""
Authorization token helpers for custom authorizers.
"""

from typing import Optional, Tuple

from pydantic import BaseModel
from typing_extensions import Annotated, Doc


def get_authorization_scheme_param(
    authorization_header_value: Optional[str],
) -> Tuple[str, str]:
    if not authorization_header_value:
        return "", ""
    scheme, _, param = authorization_header_value.partition(" ")
    return scheme, param


class AuthorizationCredentials(BaseModel):
    """
    The credentials carried by an authorization token.

    The token is split by the first space: the first part is the `scheme`, the
    second part is the `credentials`.

    For example, for a TOKEN authorizer whose identity source is the
    `Authorization` header, a client sending:

    ```
    Authorization: Bearer deadbeef12346
    ```

    produces:

    * `scheme` with the value `"Bearer"`
    * `credentials` with the value `"deadbeef12346"`
    """

    scheme: Annotated[
        str,
        Doc(
            """
            The authorization scheme extracted from the token.
            """
        ),
    ]
    credentials: Annotated[
        str,
        Doc(
            """
            The credentials extracted from the token.
            """
        ),
    ]

    @property
    def is_bearer(self) -> bool:
        return self.scheme.lower() == "bearer"

    @classmethod
    def from_token(cls, token: Optional[str]) -> Optional["AuthorizationCredentials"]:
        """Split `token`, or return None when it lacks a scheme or credentials."""
        scheme, credentials = get_authorization_scheme_param(token)
        if not (scheme and credentials):
            return None
        return cls(scheme=scheme, credentials=credentials)

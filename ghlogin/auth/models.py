"""Authentication-related Pydantic models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GitHubUser(BaseModel):
    """GitHub user data from the /user endpoint."""

    id: int
    login: str


class OAuth2Tokens(BaseModel):
    """Token response from the GitHub token endpoint."""

    access_token: str
    token_type: str = "bearer"
    scope: str = ""


class UserAttributes(BaseModel):
    """User fields exposed on a validated session, serialized as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    github_id: int
    username: str

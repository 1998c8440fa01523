"""Configuration for the Bitbucket build status provider."""

from typing import Literal

from pydantic import BaseModel, SecretStr


class BitbucketConfig(BaseModel):
    """Configuration for the Bitbucket build status provider.

    Uses an OAuth consumer (key and secret) for the client-credentials grant:
    - username: OAuth consumer key
    - password: OAuth consumer secret
    """

    username: str
    password: SecretStr
    endpoint: str = "https://api.bitbucket.org"
    auth_url: str = "https://bitbucket.org/site/oauth2/access_token"
    # State reported for cancelled stages; some setups prefer FAILED.
    cancelled_state: Literal["STOPPED", "FAILED"] = "STOPPED"

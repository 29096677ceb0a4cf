import os

from pydantic import BaseModel

SPOKE_BASE_URL = "https://api.getcircuit.com/public/v0.2b"
SPOKE_BASE_PATH = "/public/v0.2b"


class SpokeSettings(BaseModel):
    # Spoke REST API key, generated at https://dispatch.spoke.com/settings/integrations
    api_key: str | None = os.environ.get("SPOKE_API_KEY") or None
    base_url: str = os.environ.get("SPOKE_BASE_URL", SPOKE_BASE_URL)


SPOKE_SETTINGS = SpokeSettings()

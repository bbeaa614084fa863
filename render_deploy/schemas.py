from typing import Optional

from pydantic import BaseModel, ConfigDict

LIVE = "live"
CANCELED = "canceled"
DEACTIVATED = "deactivated"
FAILED_SUFFIX = "failed"


class Commit(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    message: Optional[str] = None


class Image(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ref: Optional[str] = None
    sha: Optional[str] = None


class DeployRequestResult(BaseModel):
    """A deploy as returned by the Render API."""

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    status: str = ""
    commit: Optional[Commit] = None
    image: Optional[Image] = None

    @property
    def source_description(self) -> str:
        if self.commit:
            return f"git commit: {self.commit.message}"
        if self.image:
            return f"image: {self.image.ref} SHA: {self.image.sha}"
        return "unknown"


def is_terminal_failure(status: Optional[str]) -> bool:
    if not status:
        return False
    return status.endswith(FAILED_SUFFIX) or status in (CANCELED, DEACTIVATED)


def is_live(status: Optional[str]) -> bool:
    return status == LIVE

"""Settings model for git-scrub."""

from typing import Optional

from pydantic import BaseModel, Field

# git's default ``%ad`` output, e.g. "Tue Dec 3 14:05:22 2024 +0000"
DEFAULT_DATE_FORMAT = "%a %b %d %H:%M:%S %Y %z"


class ScrubSettings(BaseModel):
    """Options shared by the log reader and the checkout coordinator."""

    default_branch: str = Field(default="main", min_length=1)
    history_limit: Optional[int] = Field(default=None, ge=1)
    date_format: str = DEFAULT_DATE_FORMAT
    git_executable: str = Field(default="git", min_length=1)
    timeout: Optional[float] = Field(default=30.0, gt=0)  # seconds per git call

    model_config = {"extra": "forbid", "frozen": True}

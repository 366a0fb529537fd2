from __future__ import annotations
from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """
    Base class for everything read from the configuration file.  Every field
    has a default, so partial objects are fine, but unrecognized keys are an
    error so that typos don't go unnoticed.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

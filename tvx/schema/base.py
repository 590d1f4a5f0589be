"""Base model and opaque identifier types shared by all vector models."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator

# Fixed-width chain integers (epochs, exit codes, gas). Strict: JSON true,
# "100" and 10.0 are rejected rather than coerced.
Int64 = Annotated[StrictInt, Field(ge=-(2**63), le=2**63 - 1)]

# Token amounts; arbitrary precision, still strict
BigInt = StrictInt


class WireModel(BaseModel):
    """Base for every test vector model.

    - Unknown wire fields are ignored so newer documents still decode
    - Instances are frozen; a decoded vector is never mutated
    - Python attribute names may differ from wire names (aliases)
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )


class CID(WireModel):
    """Content identifier kept in its native string form.

    Links are written the IPLD dag-json way, ``{"/": "bafy..."}``. A bare
    string is accepted on input. The schema never parses the identifier;
    resolving it against the CAR blob is the archive reader's job.
    """

    value: str = Field(alias="/")

    @model_validator(mode="before")
    @classmethod
    def _from_text(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"/": data}
        return data

    def __str__(self) -> str:
        return self.value

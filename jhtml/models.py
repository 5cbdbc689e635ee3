"""Field-name configuration and compile options."""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

# Candidate field names per slot, tried in order.
TAG_NAME_FIELDS: Tuple[str, ...] = ("$", "elem")
BODY_FIELDS: Tuple[str, ...] = ("body",)
RESERVED_FIELDS = frozenset(TAG_NAME_FIELDS + BODY_FIELDS)

DOCTYPE_SENTINEL = "doctype"
DEFAULT_DOCTYPE = "html"
DOCTYPE_PREFIX = f"<!DOCTYPE {DEFAULT_DOCTYPE}>"


class CompileOptions(BaseModel):
    """Options accepted by ``compile`` and the command line."""

    model_config = ConfigDict(extra="forbid")

    doctype: bool = Field(
        False,
        description="Prepend <!DOCTYPE html> to the output unconditionally.",
    )
    escape: bool = Field(
        False,
        description=(
            "HTML-escape text nodes and attribute values. Off by default: "
            "content is emitted verbatim and must be trusted."
        ),
    )

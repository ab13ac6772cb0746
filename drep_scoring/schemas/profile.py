"""Pydantic schema for CIP-119 DRep profile metadata."""

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from drep_scoring.utils.text_fields import resolve_text_field

# Plain string or JSON-LD {"@value": "..."}
TextValue = Union[str, dict[str, Any]]


class SocialReference(BaseModel):
    """A profile reference entry (CIP-119 "references")."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    uri: Optional[str] = None
    label: Optional[str] = None
    reference_type: Optional[str] = Field(None, alias="@type")

    @field_validator("uri", "label", mode="before")
    @classmethod
    def _unwrap_jsonld(cls, v):
        if v is None:
            return None
        return resolve_text_field(v)


class ProfileMetadata(BaseModel):
    """Self-reported DRep profile. Unknown keys are tolerated and kept."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    given_name: Optional[TextValue] = Field(None, alias="givenName")
    name: Optional[TextValue] = None
    objectives: Optional[TextValue] = None
    motivations: Optional[TextValue] = None
    qualifications: Optional[TextValue] = None
    bio: Optional[TextValue] = None
    references: list[SocialReference] = Field(default_factory=list)

    @field_validator("given_name", "name", "objectives", "motivations", "qualifications", "bio", mode="before")
    @classmethod
    def _drop_unusable_text(cls, v):
        """Values that are neither a string nor a JSON-LD wrapper count as absent."""
        if isinstance(v, (str, dict)):
            return v
        return None

    @field_validator("references", mode="before")
    @classmethod
    def _keep_reference_objects(cls, v):
        if not isinstance(v, (list, tuple)):
            return []
        return [r for r in v if isinstance(r, (dict, SocialReference))]

    def text(self, field_name: str) -> Optional[str]:
        """Resolved, stripped text of a profile field, or None when blank."""
        if field_name == "name":
            candidates = (self.given_name, self.name)
        else:
            candidates = (getattr(self, field_name),)
        for value in candidates:
            text = resolve_text_field(value)
            if text and text.strip():
                return text.strip()
        return None

    @classmethod
    def from_raw(cls, raw: Union["ProfileMetadata", Mapping[str, Any], None]) -> Optional["ProfileMetadata"]:
        """Coerce a raw metadata mapping (or None) into a ProfileMetadata."""
        if raw is None or isinstance(raw, ProfileMetadata):
            return raw
        return cls.model_validate(dict(raw))

"""
Pet catalog models.
Static pet definitions loaded from pets.yaml.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class PetDefinition(BaseModel):
    """Static pet definition from pets.yaml."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Unique pet name (inventory key)")
    display_name: Optional[str] = Field(None, alias="displayName", description="Display name (defaults to name)")
    icon: str = Field("", description="Icon asset reference")
    strength: int = Field(0, ge=0, description="Numeric strength")
    rarity: str = Field("Common", description="Rarity label (e.g., Common, Rare)")

    @model_validator(mode="after")
    def _default_display_name(self) -> "PetDefinition":
        if not self.display_name:
            self.display_name = self.name
        return self

"""Content models: editable pages, image-processing settings and layout."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic.alias_generators import to_camel

ImageFormat = Literal["auto", "webp", "jpg", "png", "avif"]

QUALITY_RANGE = (1, 100)
SHARPEN_RANGE = (0, 400)
BLUR_RANGE = (0, 2000)


class CamelCaseModel(BaseModel):
    """Admin API payload; camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Page(CamelCaseModel):
    """An editable content page (about, contact, home copy...)."""

    id: str = Field(..., description="Page identifier, also its URL slug")
    title: str = Field(..., description="Page title")
    content: str = Field(default="", description="Page body (HTML from the editor)")
    created_at: datetime | None = Field(default=None, description="When the page was first stored")
    updated_at: datetime | None = Field(default=None, description="When the page was last written")


class PageUpdate(CamelCaseModel):
    """Partial page write; unset fields keep their stored value."""

    title: str | None = Field(default=None, description="New title")
    content: str | None = Field(default=None, description="New body")


class ImageSettings(CamelCaseModel):
    """Image-processing settings applied when the CDN renders a photo.

    Used both for the site-wide defaults and for per-photo overrides.
    """

    quality: int | Literal["auto"] = Field(default="auto", description="1-100, or 'auto'")
    sharpen: int = Field(default=0, ge=SHARPEN_RANGE[0], le=SHARPEN_RANGE[1])
    blur: int = Field(default=0, ge=BLUR_RANGE[0], le=BLUR_RANGE[1])
    format: ImageFormat = Field(default="auto", description="Delivery format")

    @field_validator("quality")
    @classmethod
    def check_quality(cls, v: int | str) -> int | str:
        if v != "auto" and not QUALITY_RANGE[0] <= v <= QUALITY_RANGE[1]:
            raise ValueError(f"quality must be 'auto' or between {QUALITY_RANGE[0]} and {QUALITY_RANGE[1]}")
        return v

    def merged(self, override: ImageSettings | dict[str, Any] | None) -> ImageSettings:
        """Return these settings with explicitly-set override fields applied."""
        if override is None:
            return self.model_copy()
        if isinstance(override, ImageSettings):
            changes = override.model_dump(exclude_unset=True)
        else:
            changes = ImageSettings.model_validate(override).model_dump(exclude_unset=True)
        return self.model_validate({**self.model_dump(), **changes})

    def to_transformation(self) -> str:
        """Build the CDN transformation string, e.g. ``f_webp,q_80,e_sharpen:50``."""
        parts = [f"f_{self.format}", f"q_{self.quality}"]
        if self.sharpen > 0:
            parts.append(f"e_sharpen:{self.sharpen}")
        if self.blur > 0:
            parts.append(f"e_blur:{self.blur}")
        return ",".join(parts)


class NavigationItem(CamelCaseModel):
    label: str
    href: str


class LayoutSettings(CamelCaseModel):
    """Site-wide layout options edited from the layout console."""

    show_header: bool = True
    show_footer: bool = True
    grid_columns: int = Field(default=3, ge=1, le=6)
    color_scheme: Literal["light", "dark"] = "light"
    navigation_items: list[NavigationItem] = Field(default_factory=list)
    # component id -> utility classes applied to it
    component_styles: dict[str, list[str]] = Field(default_factory=dict)

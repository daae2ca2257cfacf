"""Request models for the image effect endpoints.

Field values are deliberately typed as plain strings: flag ids, effect types,
styles and formats are passed through untouched so the remote API stays the
single authority on which combinations are valid.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

StaticEffectType = Literal["circle", "overlay", "square", "background"]
AnimatedEffectType = Literal["circle", "square"]
EffectStyle = Literal["solid", "gradient"]
OutputFormat = Literal["jpg", "png"]

UPLOAD_FIELD_NAME = "file"
UPLOAD_FILE_NAME = "image.png"


class _EffectRequest(BaseModel):
    """Fields shared by both effect requests. Subclasses supply ``endpoint_path``."""

    image: bytes = Field(..., repr=False, description="Resolved source image bytes.")
    flag: str = Field(..., description="Flag identifier applied to the image.")
    effect_type: str = Field("circle", description="Placement of the flag overlay.")
    alpha: float | None = Field(
        None,
        description="Effect opacity. Falsy values (None, 0) are not sent.",
    )

    def form_fields(self) -> dict[str, str]:
        """Return the non-file multipart fields for this request."""
        if self.alpha:
            return {"alpha": _format_alpha(self.alpha)}
        return {}

    def files(self) -> dict[str, tuple[str, bytes]]:
        return {UPLOAD_FIELD_NAME: (UPLOAD_FILE_NAME, self.image)}


class StaticEffectRequest(_EffectRequest):
    """Single-frame effect rendered to jpg or png."""

    effect_style: str = Field("solid", description="Solid or gradient flag fill.")
    output_format: str = Field("png", description="Rendered file format.")

    @property
    def endpoint_path(self) -> str:
        return (
            f"image/static/{self.effect_type}/{self.effect_style}/"
            f"{self.flag}.{self.output_format}"
        )


class AnimatedEffectRequest(_EffectRequest):
    """Animated effect; the API only supports circle and square placements."""

    @property
    def endpoint_path(self) -> str:
        return f"image/animated/{self.effect_type}/{self.flag}"


def _format_alpha(alpha: float) -> str:
    # 10.0 -> "10", 0.5 -> "0.5"
    if float(alpha).is_integer():
        return str(int(alpha))
    return str(alpha)

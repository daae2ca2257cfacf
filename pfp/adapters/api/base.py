from __future__ import annotations

from abc import ABC, abstractmethod

from pfp.schemas.effects import AnimatedEffectType, EffectStyle, OutputFormat, StaticEffectType
from pfp.schemas.flags import FlagDescriptor, FlagId, FlagResponse
from pfp.utils.image_source import ImageSource


class AbstractPfPClient(ABC):
    """Interface for clients of the pride-flag image API."""

    async def __aenter__(self) -> AbstractPfPClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @abstractmethod
    async def get_flags(self) -> FlagResponse:
        """Return the raw flag metadata document keyed by flag id."""
        ...

    @abstractmethod
    async def get_flag_descriptors(self) -> dict[str, FlagDescriptor]:
        """Return flag metadata validated into ``FlagDescriptor`` models."""
        ...

    @abstractmethod
    async def get_flag_icon(self, flag: FlagId | str = "pride") -> bytes:
        """Return the icon image for ``flag``."""
        ...

    @abstractmethod
    async def create_static_effect(
        self,
        image: ImageSource,
        flag: FlagId | str,
        effect_type: StaticEffectType | str = "circle",
        effect_style: EffectStyle | str = "solid",
        output_format: OutputFormat | str = "png",
        alpha: float | None = None,
    ) -> bytes:
        """Render a single-frame flag effect over ``image``.

        Args:
            image: Image bytes, an image URL, or a local file path.
            flag: Flag identifier applied to the image.
            effect_type: Placement of the flag overlay.
            effect_style: Solid or gradient flag fill.
            output_format: Format of the rendered image.
            alpha: Effect opacity. Falsy values are not sent.

        Returns:
            bytes: Rendered image.
        """
        ...

    @abstractmethod
    async def create_animated_effect(
        self,
        image: ImageSource,
        flag: FlagId | str,
        effect_type: AnimatedEffectType | str = "circle",
        alpha: float | None = None,
    ) -> bytes:
        """Render an animated flag effect over ``image``."""
        ...

    @abstractmethod
    async def aclose(self) -> None:
        """Release timers and connections held by the client."""
        ...

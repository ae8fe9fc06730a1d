"""Framebuffer descriptions: attachment formats and specifications."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum


class FramebufferTextureFormat(Enum):
    """Pixel formats a framebuffer attachment can use."""

    NONE = 0

    # Colour
    RGBA8 = 1
    RED_INTEGER = 2

    # Depth/stencil
    DEPTH24STENCIL8 = 3

    # Defaults
    DEPTH = 3


@dataclass(frozen=True)
class FramebufferTextureSpecification:
    """Description of one framebuffer attachment."""

    texture_format: FramebufferTextureFormat = FramebufferTextureFormat.NONE

    @property
    def is_depth(self) -> bool:
        return self.texture_format is FramebufferTextureFormat.DEPTH24STENCIL8


def _as_texture_spec(
    item: FramebufferTextureSpecification | FramebufferTextureFormat,
) -> FramebufferTextureSpecification:
    if isinstance(item, FramebufferTextureSpecification):
        return item
    return FramebufferTextureSpecification(FramebufferTextureFormat(item))


@dataclass
class FramebufferAttachmentSpecification:
    """The ordered attachments of a framebuffer; formats are accepted directly."""

    attachments: list[FramebufferTextureSpecification] = field(default_factory=list)

    def __init__(
        self,
        attachments: Iterable[
            FramebufferTextureSpecification | FramebufferTextureFormat
        ] = (),
    ) -> None:
        self.attachments = [_as_texture_spec(item) for item in attachments]

    def __iter__(self) -> Iterator[FramebufferTextureSpecification]:
        return iter(self.attachments)

    def __len__(self) -> int:
        return len(self.attachments)


@dataclass
class FramebufferSpecification:
    """Size, attachments and sampling of a framebuffer."""

    width: int = 0
    height: int = 0
    attachments: FramebufferAttachmentSpecification = field(
        default_factory=FramebufferAttachmentSpecification
    )
    samples: int = 1
    swap_chain_target: bool = False
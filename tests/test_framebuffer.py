from hazelengine.framebuffer import (
    FramebufferAttachmentSpecification,
    FramebufferSpecification,
    FramebufferTextureFormat,
    FramebufferTextureSpecification,
)


def test_depth_is_alias_of_depth24stencil8():
    spec = FramebufferTextureSpecification(FramebufferTextureFormat.DEPTH)
    assert spec.texture_format is FramebufferTextureFormat.DEPTH24STENCIL8


def test_texture_specification_default_is_none():
    assert FramebufferTextureSpecification().texture_format is FramebufferTextureFormat.NONE


def test_texture_specification_is_depth():
    assert FramebufferTextureSpecification(FramebufferTextureFormat.DEPTH).is_depth
    assert not FramebufferTextureSpecification(FramebufferTextureFormat.RGBA8).is_depth


def test_attachment_specification_converts_formats():
    spec = FramebufferAttachmentSpecification(
        [
            FramebufferTextureFormat.RGBA8,
            FramebufferTextureSpecification(FramebufferTextureFormat.RED_INTEGER),
            FramebufferTextureFormat.DEPTH,
        ]
    )
    assert len(spec) == 3
    assert [a.texture_format for a in spec] == [
        FramebufferTextureFormat.RGBA8,
        FramebufferTextureFormat.RED_INTEGER,
        FramebufferTextureFormat.DEPTH24STENCIL8,
    ]


def test_attachment_specification_default_empty():
    assert list(FramebufferAttachmentSpecification()) == []


def test_framebuffer_specification_defaults():
    spec = FramebufferSpecification()
    assert (spec.width, spec.height) == (0, 0)
    assert spec.samples == 1
    assert spec.swap_chain_target is False
    assert len(spec.attachments) == 0


def test_framebuffer_specifications_do_not_share_attachments():
    first = FramebufferSpecification()
    second = FramebufferSpecification()
    first.attachments.attachments.append(
        FramebufferTextureSpecification(FramebufferTextureFormat.RGBA8)
    )
    assert len(second.attachments) == 0
"""Tests for flag metadata and effect request models."""

import pytest
from pydantic import ValidationError

from pfp.schemas.effects import AnimatedEffectRequest, StaticEffectRequest, _EffectRequest
from pfp.schemas.flags import FLAG_IDS, FlagDescriptor


def test_known_flag_ids() -> None:
    assert len(FLAG_IDS) == 14
    assert {"pride", "trans", "bi", "pan", "nb", "poc"} <= set(FLAG_IDS)


def test_flag_descriptor_reads_api_alias() -> None:
    descriptor = FlagDescriptor.model_validate(
        {"key": "ace", "defaultAlpha": 0.7, "tooltip": "Asexual"}
    )

    assert descriptor.default_alpha == 0.7
    assert descriptor.tooltip == "Asexual"


def test_flag_descriptor_requires_tooltip() -> None:
    with pytest.raises(ValidationError):
        FlagDescriptor.model_validate({"key": "ace", "defaultAlpha": 0.7})


def test_static_request_defaults() -> None:
    request = StaticEffectRequest(image=b"img", flag="pride")

    assert request.endpoint_path == "image/static/circle/solid/pride.png"
    assert request.form_fields() == {}
    assert request.files() == {"file": ("image.png", b"img")}


def test_animated_request_path() -> None:
    request = AnimatedEffectRequest(image=b"img", flag="lesbian", effect_type="square")

    assert request.endpoint_path == "image/animated/square/lesbian"


def test_shared_base_has_no_endpoint_path() -> None:
    assert not hasattr(_EffectRequest, "endpoint_path")
    assert isinstance(StaticEffectRequest.endpoint_path, property)
    assert isinstance(AnimatedEffectRequest.endpoint_path, property)


@pytest.mark.parametrize(
    ("alpha", "expected"),
    [
        (None, {}),
        (0, {}),
        (0.0, {}),
        (10, {"alpha": "10"}),
        (0.35, {"alpha": "0.35"}),
    ],
)
def test_alpha_is_sent_only_when_truthy(alpha, expected) -> None:
    request = StaticEffectRequest(image=b"img", flag="pan", alpha=alpha)

    assert request.form_fields() == expected


def test_values_are_not_validated_locally() -> None:
    request = StaticEffectRequest(
        image=b"img",
        flag="rainbow-cat",
        effect_type="spiral",
        effect_style="plaid",
        output_format="webp",
    )

    assert request.endpoint_path == "image/static/spiral/plaid/rainbow-cat.webp"
